"""
loader.py - Building a tree from external record loaders and the persisted stores.

A loader reads some source of genealogical records (a GEDCOM file, a Gramps
database, ...) and populates a tree through its find-or-create operations.
This module only defines the contract and wires loaders to the stores; the
loaders themselves live with the applications that need them.

Module: family_graph.loader
"""
from __future__ import annotations

__all__ = ['Loader', 'StorePaths', 'load_tree', 'load_tree_from_dir', 'save_stores']

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from .annotations import Annotations, load_annotations
from .errors import StoreError
from .gazetteer import Gazetteer, load_gazetteer, save_gazetteer
from .identity_map import IdentityMap, load_identity_map, save_identity_map
from .surnames import SurnameGroups, load_surname_groups
from .tree import Tree

logger = logging.getLogger(__name__)


class Loader(Protocol):
    """
    Protocol for record loaders.

    Methods:
        load(tree: Tree) -> None:
            Add people, sources, places and events to the tree using
            find_person, find_source and find_place_unstructured.
    """
    def load(self, tree: Tree) -> None:
        ...


@dataclass
class StorePaths:
    """Locations of the persisted stores."""
    identity_map: Optional[Path] = None
    gazetteer: Optional[Path] = None
    annotations: Optional[Path] = None
    surname_groups: Optional[Path] = None

    @classmethod
    def from_dir(cls, store_dir: Union[str, Path]) -> 'StorePaths':
        store_dir = Path(store_dir)
        return cls(
            identity_map=store_dir / "identitymap.json",
            gazetteer=store_dir / "gazetteer.json",
            annotations=store_dir / "annotations.json",
            surname_groups=store_dir / "surnames.json",
        )


def load_tree(
    loaders: Iterable[Loader],
    identity_map: Optional[IdentityMap] = None,
    gazetteer: Optional[Gazetteer] = None,
    annotations: Optional[Annotations] = None,
    place_similarity_threshold: int = 92,
    surname_groups: Optional[SurnameGroups] = None,
) -> Tree:
    """
    Create a tree and run each loader over it in order.

    Args:
        loaders (Iterable[Loader]): Loaders to run.
        identity_map (Optional[IdentityMap]): Identity map, empty if None.
        gazetteer (Optional[Gazetteer]): Gazetteer, empty if None.
        annotations (Optional[Annotations]): Annotations, empty if None.
        place_similarity_threshold (int): Threshold for duplicate place name anomalies.
        surname_groups (Optional[SurnameGroups]): Surname variant groups for tree metrics.

    Returns:
        Tree: The loaded, not yet generated, tree.
    """
    tree = Tree(
        identity_map=identity_map,
        gazetteer=gazetteer,
        annotations=annotations,
        place_similarity_threshold=place_similarity_threshold,
        surname_groups=surname_groups,
    )
    for loader in loaders:
        logger.info(f"Loading records with {type(loader).__name__}")
        loader.load(tree)
    logger.info(f"Loaded {len(tree.people)} people, {len(tree.places)} places, {len(tree.sources)} sources")
    return tree


def load_tree_from_dir(loaders: Iterable[Loader], store_dir: Union[str, Path],
                       place_similarity_threshold: int = 92) -> Tree:
    """
    Read the stores from a directory, then load a tree.

    Raises:
        StoreError: If any store exists but cannot be read.
    """
    paths = StorePaths.from_dir(store_dir)
    return load_tree(
        loaders,
        identity_map=load_identity_map(paths.identity_map),
        gazetteer=load_gazetteer(paths.gazetteer),
        annotations=load_annotations(paths.annotations),
        place_similarity_threshold=place_similarity_threshold,
        surname_groups=load_surname_groups(paths.surname_groups),
    )


def save_stores(tree: Tree, store_dir: Union[str, Path]) -> None:
    """
    Write the identity map and gazetteer, which loading may have extended.

    Annotations are maintained by hand and are only read.

    Raises:
        StoreError: If a store cannot be written.
    """
    store_dir = Path(store_dir)
    try:
        store_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreError("store directory", f"create failed: {e}", store_dir) from e
    paths = StorePaths.from_dir(store_dir)
    save_identity_map(paths.identity_map, tree.identity_map)
    save_gazetteer(paths.gazetteer, tree.gazetteer)
