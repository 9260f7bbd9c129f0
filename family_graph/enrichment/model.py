"""
Data records produced while building and enriching the family graph.

Inferences explain a value the pipeline derived rather than read from a
source; anomalies are non-fatal data quality notes attached to a person or
place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

# Inference types
INFERENCE_YEAR_OF_BIRTH = "Year of birth"
INFERENCE_YEAR_OF_DEATH = "Year of death"
INFERENCE_MODE_OF_DEATH = "Mode of death"
INFERENCE_GENERAL_FACT = "General fact"

# Anomaly categories
ANOMALY_NAME = "Name"
ANOMALY_PLACE = "Place"
ANOMALY_FAMILY = "Family"
ANOMALY_DATE = "Date"


@dataclass
class Provenance:
    rule_id: str
    inputs: Tuple[str, ...] = ()
    notes: str = ""


@dataclass
class Inference:
    """
    A derived value together with the reason it was derived.

    Attributes:
        type (str): What was inferred, e.g. "Year of birth".
        value (str): The inferred value, e.g. "before 1887".
        reason (str): Human readable justification.
        provenance (Provenance): The rule that produced the inference.
    """
    type: str
    value: str
    reason: str
    provenance: Provenance = field(default_factory=lambda: Provenance(rule_id="unknown"))

    def as_citation(self) -> str:
        return f"{self.type} inferred to be {self.value} because {self.reason}"


@dataclass(frozen=True)
class Anomaly:
    category: str
    text: str
    context: str = ""


@dataclass
class Occupation:
    detail: str
    start_date: Optional[Any] = None
    end_date: Optional[Any] = None
    place_name: str = ""


@dataclass
class Fact:
    category: str
    detail: str
