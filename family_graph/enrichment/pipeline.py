"""
Generation pipeline: the ordered passes that turn a loaded tree into a finished graph.

Each pass is a full sweep over people, families, places or sources, always in
canonical id order, and later passes rely on what earlier ones established
(best events before inference, family links before relationship labelling).
The passes therefore run strictly in sequence:

    1.  apply_annotations       - overrides on people, places, sources and the tree
    2.  propagate_parents       - add each person to their parents' children
    3.  build_families          - parent families, then marriages/divorces between couples
    4.  check_families          - conflicting parent assignments become anomalies
    5.  select_best_events      - best birth/death-like events, vital years, possibly alive
    6.  refine_names            - familiar, unique and sort names; name anomalies
    7.  refine_occupations      - promote a single occupation to primary
    8.  expand_timelines        - children's births and deaths into parents' timelines
    9.  run_inference_rules     - per-person rules (birth year, alive or dead, ...)
    10. infer_family_dates      - family start and end dates
    11. label_and_redact        - relations to the key person, then redaction
    12. trim                    - timelines, duplicate links, family order

Data problems never stop a run; they are recorded as anomalies.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Set, Tuple

from family_graph.dates import UNKNOWN_DATE, AboutYearDate, BeforeYearDate, Date
from family_graph.family import Family, FamilyBond, FamilyEndReason
from family_graph.gender import Gender
from family_graph.life_event import EventKind, IndividualEvent, PartyEvent, TimelineEvent
from family_graph.person import UNKNOWN_NAME, Person
from family_graph.relationship import label_relations

from .config import GenerationConfig
from .model import ANOMALY_FAMILY, ANOMALY_NAME
from .redaction import redact_with_descendants, should_redact
from .rules.base import BaseRule

if TYPE_CHECKING:
    from family_graph.app_hooks import AppHooks
    from family_graph.tree import Tree

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    anomaly_count: int = 0
    inference_count: int = 0
    redacted_count: int = 0
    labelled_count: int = 0
    passes_run: int = 0


def _dedupe(items: list) -> list:
    """Remove repeated entries by id, keeping the first occurrence."""
    seen: Set[str] = set()
    out = []
    for item in items:
        if item.id in seen:
            continue
        seen.add(item.id)
        out.append(item)
    return out


def _append_once(timeline: List[TimelineEvent], ev: TimelineEvent) -> None:
    if not any(e is ev for e in timeline):
        timeline.append(ev)


def _is_principal(person: Person, ev: TimelineEvent) -> bool:
    return isinstance(ev, IndividualEvent) and person.same_as(ev.principal)


def _is_placeholder_birth(person: Person, ev: Optional[TimelineEvent]) -> bool:
    """True for the unknown-dated birth given to every new person."""
    return (
        ev is not None
        and ev.kind is EventKind.BIRTH
        and ev.date.is_unknown()
        and not any(e is ev for e in person.timeline)
    )


def _prefer(current: Optional[TimelineEvent], ev: TimelineEvent, exact: EventKind,
            current_is_empty: bool) -> bool:
    """
    Decide whether ev replaces the current best event.

    The exact kind (Birth or Death) overrides anything else and replaces its
    own kind only when earlier. Other kinds replace their own kind only when
    earlier and are otherwise accepted only when nothing is selected.
    """
    if current_is_empty:
        return True
    if ev.kind is exact:
        if current.kind is exact:
            return ev.date.sorts_before(current.date)
        return True
    if current.kind is ev.kind:
        return ev.date.sorts_before(current.date)
    return False


def vital_years(birth_year: Optional[int], death_year: Optional[int], possibly_alive: bool) -> str:
    if birth_year is None and death_year is None:
        return "-?-"
    if death_year is None:
        return f"{birth_year}-" if possibly_alive else f"{birth_year}-?"
    if birth_year is None:
        return f"?-{death_year}"
    return f"{birth_year}-{death_year}"


class GenerationPipeline:
    """
    Runs the generation passes over a tree.

    Attributes:
        config (GenerationConfig): Pipeline configuration.
        rules (List[BaseRule]): Inference rules run per person in pass 9, in order.
        app_hooks (Optional[AppHooks]): Progress reporting hooks.
    """

    def __init__(self, config: GenerationConfig, rules: Sequence[BaseRule], app_hooks: Optional['AppHooks'] = None) -> None:
        self.config = config
        self.rules = list(rules)
        self.app_hooks = app_hooks
        self.redact_living = False

        # Set app_hooks on all rules that support it
        for rule in self.rules:
            if hasattr(rule, 'app_hooks'):
                rule.app_hooks = app_hooks

    def passes(self) -> List[Tuple[str, Callable[['Tree', GenerationResult], None]]]:
        return [
            ("Applying annotations", self.apply_annotations),
            ("Propagating parents", self.propagate_parents),
            ("Building families", self.build_families),
            ("Checking families", self.check_families),
            ("Selecting best events", self.select_best_events),
            ("Refining names", self.refine_names),
            ("Refining occupations", self.refine_occupations),
            ("Expanding timelines", self.expand_timelines),
            ("Running inference rules", self.run_inference_rules),
            ("Inferring family dates", self.infer_family_dates),
            ("Labelling relations and redacting", self.label_and_redact),
            ("Trimming", self.trim),
        ]

    def run(self, tree: 'Tree', redact_living: bool = False) -> GenerationResult:
        """
        Run every pass over the tree, in order.

        Args:
            tree (Tree): A freshly loaded tree; it is modified in place.
            redact_living (bool): Redact possibly living and recently deceased people.

        Returns:
            GenerationResult: Counts of what the run produced.
        """
        self.redact_living = redact_living
        result = GenerationResult()
        passes = self.passes()
        logger.info(f"Generating tree with {len(tree.people)} people and {len(tree.families)} families")
        self._report_step(info="Generating", target=len(passes), reset_counter=True, plus_step=0)

        for info, run_pass in passes:
            logger.debug(f"Pass {result.passes_run + 1}: {info}")
            run_pass(tree, result)
            result.passes_run += 1
            self._report_step(info=info, plus_step=1)

        result.anomaly_count = (
            sum(len(p.anomalies) for p in tree.people.values())
            + sum(len(p.anomalies) for p in tree.places.values())
        )
        result.inference_count = sum(len(p.inferences) for p in tree.people.values())
        logger.info(
            f"Generation finished: {result.anomaly_count} anomalies, "
            f"{result.inference_count} inferences, {result.redacted_count} redacted"
        )
        return result

    # 1
    def apply_annotations(self, tree: 'Tree', result: GenerationResult) -> None:
        annotations = tree.annotations
        if annotations is None:
            return
        for person in tree.list_people():
            annotations.apply_person(person)
        for place in tree.list_places():
            annotations.apply_place(place)
        for source in tree.list_sources():
            annotations.apply_source(source)
        annotations.apply_tree(tree)

    # 2
    def propagate_parents(self, tree: 'Tree', result: GenerationResult) -> None:
        for person in tree.list_people():
            for parent in (person.father, person.mother):
                if not parent.is_unknown():
                    parent.children.append(person)

    # 3
    def build_families(self, tree: 'Tree', result: GenerationResult) -> None:
        for person in tree.list_people():
            father, mother = person.father, person.mother
            family: Optional[Family] = None
            if not father.is_unknown() and not mother.is_unknown():
                family = tree.find_family(father, mother)
            elif not father.is_unknown():
                family = tree.find_family_one_parent(father, person)
            elif not mother.is_unknown():
                family = tree.find_family_one_parent(mother, person)
            if family is not None:
                family.add_child(person)

            for ev in person.timeline:
                if isinstance(ev, PartyEvent) and ev.directly_involves(person):
                    self._add_couple_event(tree, ev)

    def _add_couple_event(self, tree: 'Tree', ev: PartyEvent) -> None:
        couple = self._order_couple(ev.husband, ev.wife)
        if couple is None:
            return
        father, mother = couple

        if ev.kind.is_marriagelike():
            family = tree.find_family(father, mother)
            family.bond = FamilyBond.MARRIED
            _append_once(family.timeline, ev)
            family.best_start_event = ev
            family.best_start_date = ev.date
            if not any(s.same_as(mother) for s in father.spouses):
                father.spouses.append(mother)
            if not any(s.same_as(father) for s in mother.spouses):
                mother.spouses.append(father)
        elif ev.kind in (EventKind.DIVORCE, EventKind.ANNULMENT):
            family = tree.find_family(father, mother)
            _append_once(family.timeline, ev)
            family.best_end_event = ev
            family.best_end_date = ev.date
            family.end_reason = FamilyEndReason.DIVORCE if ev.kind is EventKind.DIVORCE else FamilyEndReason.ANNULMENT

    @staticmethod
    def _order_couple(p1: Person, p2: Person) -> Optional[Tuple[Person, Person]]:
        """Return (male, female) for an opposite-gender couple, None otherwise."""
        if p1.is_unknown() or p2.is_unknown():
            return None
        if p1.gender is Gender.MALE and p2.gender is Gender.FEMALE:
            return p1, p2
        if p1.gender is Gender.FEMALE and p2.gender is Gender.MALE:
            return p2, p1
        return None

    # 4
    def check_families(self, tree: 'Tree', result: GenerationResult) -> None:
        for family in tree.list_families():
            for child in family.children:
                for role, family_parent, own_parent in (
                    ("father", family.father, child.father),
                    ("mother", family.mother, child.mother),
                ):
                    if family_parent.is_unknown() or own_parent.is_unknown():
                        continue
                    if not family_parent.same_as(own_parent):
                        child.add_anomaly(
                            ANOMALY_FAMILY,
                            "conflicting parent assignment",
                            context=f"{role} is {own_parent.id} but family {family.id} has {family_parent.id}",
                        )

    # 5
    def select_best_events(self, tree: 'Tree', result: GenerationResult) -> None:
        now = self.config.now_year()
        for person in tree.list_people():
            for ev in person.timeline:
                if not _is_principal(person, ev):
                    continue
                if ev.kind.is_birthlike():
                    current = person.best_birthlike_event
                    empty = current is None or _is_placeholder_birth(person, current)
                    if _prefer(current, ev, EventKind.BIRTH, empty):
                        person.best_birthlike_event = ev
                elif ev.kind.is_deathlike():
                    current = person.best_deathlike_event
                    if _prefer(current, ev, EventKind.DEATH, current is None):
                        person.best_deathlike_event = ev

            birth_year = person.birth_year()
            death_year = person.death_year()
            person.possibly_alive = (
                death_year is None
                and birth_year is not None
                and birth_year + self.config.max_lifespan > now
            )
            person.vital_years = vital_years(birth_year, death_year, person.possibly_alive)

    # 6
    def refine_names(self, tree: 'Tree', result: GenerationResult) -> None:
        for person in tree.list_people():
            if person.nickname:
                person.familiar_name = person.nickname
            else:
                person.familiar_name = person.given_name.split(" ")[0]
            person.familiar_full_name = f"{person.familiar_name} {person.family_name}"

            if person.vital_years:
                person.unique_name = f"{person.full_name} ({person.vital_years})"
                person.sort_name = f"{person.sort_name} ({person.vital_years})"

            if not person.given_name or person.given_name == UNKNOWN_NAME:
                person.add_anomaly(ANOMALY_NAME, "given name is missing")
            if not person.family_name or person.family_name == UNKNOWN_NAME:
                person.add_anomaly(ANOMALY_NAME, "family name is missing")
            elif len(person.family_name) > 1 and person.family_name.isupper():
                person.add_anomaly(ANOMALY_NAME, "family name is all upper case", context=person.family_name)

    # 7
    def refine_occupations(self, tree: 'Tree', result: GenerationResult) -> None:
        for person in tree.list_people():
            if len(person.occupations) == 1 and not person.primary_occupation:
                person.primary_occupation = person.occupations[0].detail

    # 8
    def expand_timelines(self, tree: 'Tree', result: GenerationResult) -> None:
        for person in tree.list_people():
            parents = [p for p in (person.father, person.mother) if not p.is_unknown()]
            bev = person.best_birthlike_event
            if bev is not None:
                for parent in parents:
                    _append_once(parent.timeline, bev)

            dev = person.best_deathlike_event
            if dev is not None:
                for parent in parents:
                    pdev = parent.best_deathlike_event
                    # only deaths the parent lived to see
                    if pdev is None or dev.date.sorts_before(pdev.date):
                        _append_once(parent.timeline, dev)

    # 9
    def run_inference_rules(self, tree: 'Tree', result: GenerationResult) -> None:
        events = [ev for person in tree.list_people() for ev in person.timeline]
        for rule in self.rules:
            if hasattr(rule, 'settle'):
                rule.settle(events)
        for person in tree.list_people():
            for rule in self.rules:
                if rule.apply(person):
                    logger.debug(f"Rule {rule.rule_id} changed {person.id}")

    # 10
    def infer_family_dates(self, tree: 'Tree', result: GenerationResult) -> None:
        for family in tree.list_families():
            self._infer_family_end(family)
            self._infer_family_start(family)

    @staticmethod
    def _infer_family_end(family: Family) -> None:
        if family.best_end_date is not None:
            return
        fdev = None if family.father.is_unknown() else family.father.best_deathlike_event
        mdev = None if family.mother.is_unknown() else family.mother.best_deathlike_event
        if fdev is None and mdev is None:
            return

        if mdev is None or (fdev is not None and not mdev.date.sorts_before(fdev.date)):
            first, event, survivor = family.father, fdev, family.mother
            survivor_death = mdev
        else:
            first, event, survivor = family.mother, mdev, family.father
            survivor_death = fdev

        family.best_end_date = event.date
        family.best_end_event = event
        family.end_death_person = first
        family.end_reason = FamilyEndReason.DEATH
        if survivor_death is not None:
            _append_once(survivor.timeline, event)

    @staticmethod
    def _infer_family_start(family: Family) -> None:
        def consider(date: Date, year: Optional[int], bounded: Callable[[int], Date]) -> None:
            if year is None:
                return
            if family.best_start_date is None or date.sorts_before(family.best_start_date):
                family.best_start_date = bounded(year)

        for parent in (family.father, family.mother):
            if parent.is_unknown() or parent.best_deathlike_event is None:
                continue
            consider(parent.best_deathlike_event.date, parent.death_year(), BeforeYearDate)

        for child in family.children:
            if child.best_birthlike_event is not None:
                consider(child.best_birthlike_event.date, child.birth_year(), AboutYearDate)
            if child.best_deathlike_event is not None:
                consider(child.best_deathlike_event.date, child.death_year(), BeforeYearDate)

    # 11
    def label_and_redact(self, tree: 'Tree', result: GenerationResult) -> None:
        if tree.key_person is not None:
            result.labelled_count = len(label_relations(tree.key_person))

        now = self.config.now_year()
        done: Set[str] = set()
        for person in tree.list_people():
            if person.id in done:
                continue
            if person.redacted or (
                self.redact_living and should_redact(person, now, self.config.recent_death_years)
            ):
                logger.debug(f"Redacting {person.id} and descendants")
                for redacted in redact_with_descendants(person):
                    done.add(redacted.id)
        result.redacted_count = len(done)

    # 12
    def trim(self, tree: 'Tree', result: GenerationResult) -> None:
        for person in tree.list_people():
            person.timeline = self._trimmed_person_timeline(person)
            person.families = _dedupe(person.families)
            person.children = _dedupe(person.children)
            person.spouses = _dedupe(person.spouses)
            person.families.sort(key=lambda f: (f.best_start_date or UNKNOWN_DATE).sort_key())

        for place in tree.list_places():
            place.timeline = [ev for ev in place.timeline if not self._has_redacted_participant(ev)]
        for source in tree.list_sources():
            source.event_citations = [ev for ev in source.event_citations if not self._has_redacted_participant(ev)]

    @staticmethod
    def _has_redacted_participant(ev: TimelineEvent) -> bool:
        return any(p.redacted for p in ev.participants())

    def _trimmed_person_timeline(self, person: Person) -> List[TimelineEvent]:
        bev = person.best_birthlike_event
        dev = person.best_deathlike_event
        kept: List[TimelineEvent] = []
        for ev in person.timeline:
            if ev.directly_involves(person):
                kept.append(ev)
                continue
            if self._has_redacted_participant(ev):
                continue
            if bev is not None and ev.date.sorts_before(bev.date):
                continue
            if dev is not None and dev.date.sorts_before(ev.date):
                continue
            kept.append(ev)
        return kept

    def _report_step(self, info: str = "", target: Optional[int] = None, reset_counter: bool = False, plus_step: int = 0) -> None:
        """
        Report a step via app hooks if available. (Private method)

        Args:
            info (str): Information message.
            target (int): Target count for progress.
            reset_counter (bool): Whether to reset the counter.
            plus_step (int): Incremental step count.
        """
        if self.app_hooks and callable(getattr(self.app_hooks, "report_step", None)):
            self.app_hooks.report_step(info=info, target=target, reset_counter=reset_counter, plus_step=plus_step)
        else:
            logger.debug(info)
