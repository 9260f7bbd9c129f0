"""Enrichment module: the generation pipeline that derives facts for the family graph.

The pipeline runs a fixed sequence of passes over a loaded Tree:
    - Linking parents, children and families
    - Selecting best birth/death-like events and vital years
    - Refining names and occupations, expanding timelines
    - Running inference rules (birth year, death year, alive/dead, cause of death, general facts)
    - Inferring family start/end dates
    - Labelling relations to the key person and redacting living people
    - Trimming and de-duplicating timelines

Core classes:
    - GenerationPipeline (enrichment.pipeline): Orchestrates the ordered passes
    - GenerationConfig: Configuration loaded from config.yaml
    - InferenceRule / BaseRule (enrichment.rules): Per-person inference rules

Data models:
    - Inference: Derived value with a human readable reason
    - Anomaly: Non-fatal data quality note
    - Provenance: Which rule produced an inference

Customization:
    Create custom rules by:
        1. Subclass BaseRule
        2. Implement apply(person) -> bool
        3. Use @register_rule decorator

The pipeline and rules are imported from their own modules since they depend
on the graph model, which itself uses the records defined here.
"""

from .model import Anomaly
from .model import Fact
from .model import Inference
from .model import Occupation
from .model import Provenance
from .config import GenerationConfig

__all__ = [
    'Anomaly',
    'Fact',
    'Inference',
    'Occupation',
    'Provenance',
    'GenerationConfig',
]
