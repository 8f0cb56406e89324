"""
Classical cancellation (parihara) rules.

Nadi and Bhakoot cancellations are ordered rule chains: the first rule
whose predicate holds decides the verdict and is the one recorded.
Manglik rules are evaluated independently and every match is recorded.
"""

import logging
from typing import Callable, Optional, Tuple

from milan.domain.matching import tables
from milan.domain.matching.enums import (
    CancellationRule,
    CancellationVerdict,
    ManglikBalance,
    ManglikLevel,
    Party,
    Relationship,
)
from milan.domain.matching.schemas import (
    BirthProfile,
    CancellationResult,
    DetectedDoshas,
    DoshaFinding,
    ManglikMatch,
)

logger = logging.getLogger(__name__)


Predicate = Callable[[BirthProfile, BirthProfile], bool]


class CancellationRuleSpec:
    """
    One link of a cancellation chain.
    """

    def __init__(
        self,
        rule: CancellationRule,
        verdict: CancellationVerdict,
        predicate: Predicate,
    ):
        self.rule = rule
        self.verdict = verdict
        self.predicate = predicate

    def applies(self, bride: BirthProfile, groom: BirthProfile) -> bool:
        return self.predicate(bride, groom)


# ─────────────────────────────────────────────
# Nadi predicates
# ─────────────────────────────────────────────

def _same_nakshatra_different_rashi(bride: BirthProfile, groom: BirthProfile) -> bool:
    return bride.nakshatra == groom.nakshatra and bride.moon_sign != groom.moon_sign


def _same_rashi_different_nakshatra(bride: BirthProfile, groom: BirthProfile) -> bool:
    return bride.moon_sign == groom.moon_sign and bride.nakshatra != groom.nakshatra


def _different_pada(bride: BirthProfile, groom: BirthProfile) -> bool:
    return (
        bride.nakshatra == groom.nakshatra
        and bride.moon_sign == groom.moon_sign
        and bride.pada != groom.pada
    )


def _exempted_pair(bride: BirthProfile, groom: BirthProfile) -> bool:
    return frozenset({bride.nakshatra, groom.nakshatra}) in tables.NADI_EXEMPT_PAIRS


def _nakshatra_lords_friends(bride: BirthProfile, groom: BirthProfile) -> bool:
    bride_lord = tables.nakshatra_lord(bride.nakshatra)
    groom_lord = tables.nakshatra_lord(groom.nakshatra)
    return bride_lord != groom_lord and tables.mutual_friends(bride_lord, groom_lord)


def _same_nakshatra_lord(bride: BirthProfile, groom: BirthProfile) -> bool:
    return (
        bride.nakshatra != groom.nakshatra
        and tables.nakshatra_lord(bride.nakshatra) == tables.nakshatra_lord(groom.nakshatra)
    )


# ─────────────────────────────────────────────
# Bhakoot predicates
# ─────────────────────────────────────────────

def _same_sign_lord(bride: BirthProfile, groom: BirthProfile) -> bool:
    return bride.lord == groom.lord


def _sign_lords_mutual_friends(bride: BirthProfile, groom: BirthProfile) -> bool:
    return bride.lord != groom.lord and tables.mutual_friends(bride.lord, groom.lord)


def _lord_exalted_in_partner_sign(bride: BirthProfile, groom: BirthProfile) -> bool:
    return (
        tables.exaltation_sign(bride.lord) == groom.moon_sign
        or tables.exaltation_sign(groom.lord) == bride.moon_sign
    )


def _sign_lords_friendly(bride: BirthProfile, groom: BirthProfile) -> bool:
    if bride.lord == groom.lord:
        return False
    relations = {
        tables.relationship(bride.lord, groom.lord),
        tables.relationship(groom.lord, bride.lord),
    }
    return relations == {Relationship.FRIEND, Relationship.NEUTRAL}


def _same_element(bride: BirthProfile, groom: BirthProfile) -> bool:
    return tables.rashi_element(bride.moon_sign) == tables.rashi_element(groom.moon_sign)


_FULL = CancellationVerdict.FULLY_CANCELLED
_PARTIAL = CancellationVerdict.PARTIALLY_CANCELLED

NADI_CHAIN: Tuple[CancellationRuleSpec, ...] = (
    CancellationRuleSpec(CancellationRule.NADI_CANCEL_SAME_NAK_DIFF_RASHI, _FULL, _same_nakshatra_different_rashi),
    CancellationRuleSpec(CancellationRule.NADI_CANCEL_SAME_RASHI_DIFF_NAK, _FULL, _same_rashi_different_nakshatra),
    CancellationRuleSpec(CancellationRule.NADI_CANCEL_DIFF_PADA, _PARTIAL, _different_pada),
    CancellationRuleSpec(CancellationRule.NADI_CANCEL_SPECIAL_PAIR, _PARTIAL, _exempted_pair),
    CancellationRuleSpec(CancellationRule.NADI_CANCEL_LORDS_FRIENDS, _PARTIAL, _nakshatra_lords_friends),
    CancellationRuleSpec(CancellationRule.NADI_CANCEL_SAME_NAK_LORD, _PARTIAL, _same_nakshatra_lord),
)

BHAKOOT_CHAIN: Tuple[CancellationRuleSpec, ...] = (
    CancellationRuleSpec(CancellationRule.BHAKOOT_CANCEL_SAME_LORD, _FULL, _same_sign_lord),
    CancellationRuleSpec(CancellationRule.BHAKOOT_CANCEL_MUTUAL_FRIENDS, _FULL, _sign_lords_mutual_friends),
    CancellationRuleSpec(CancellationRule.BHAKOOT_CANCEL_EXALTATION, _PARTIAL, _lord_exalted_in_partner_sign),
    CancellationRuleSpec(CancellationRule.BHAKOOT_CANCEL_FRIENDLY, _PARTIAL, _sign_lords_friendly),
    CancellationRuleSpec(CancellationRule.BHAKOOT_CANCEL_ELEMENT, _PARTIAL, _same_element),
)


def first_match(
    chain: Tuple[CancellationRuleSpec, ...],
    bride: BirthProfile,
    groom: BirthProfile,
) -> Optional[CancellationRuleSpec]:
    for spec in chain:
        if spec.applies(bride, groom):
            return spec
    return None


def levels_compatible(first: ManglikLevel, second: ManglikLevel) -> bool:
    """Two Manglik levels cancel each other when at most one step apart."""
    return abs(first.rank - second.rank) <= 1


class CancellationEngine:
    """
    Annotates raw dosha findings with cancellation verdicts.

    Vedha, Rajju and Stree Deergha have no classical cancellation
    and keep the NOT_APPLICABLE verdict.
    """

    def __init__(
        self,
        nadi_chain: Tuple[CancellationRuleSpec, ...] = NADI_CHAIN,
        bhakoot_chain: Tuple[CancellationRuleSpec, ...] = BHAKOOT_CHAIN,
    ):
        self.nadi_chain = nadi_chain
        self.bhakoot_chain = bhakoot_chain

    def apply(
        self,
        bride: BirthProfile,
        groom: BirthProfile,
        detected: DetectedDoshas,
    ) -> CancellationResult:
        bride_manglik = self._cancel_manglik(bride, detected.bride_manglik, detected.groom_manglik)
        groom_manglik = self._cancel_manglik(groom, detected.groom_manglik, detected.bride_manglik)

        doshas = detected.model_copy(update={
            "bride_manglik": bride_manglik,
            "groom_manglik": groom_manglik,
            "nadi": self._run_chain(self.nadi_chain, detected.nadi, bride, groom),
            "bhakoot": self._run_chain(self.bhakoot_chain, detected.bhakoot, bride, groom),
        })

        return CancellationResult(
            doshas=doshas,
            manglik=self.manglik_match(bride_manglik, groom_manglik),
        )

    # ─────────────────────────────────────────────
    # Rule chains
    # ─────────────────────────────────────────────

    def _run_chain(
        self,
        chain: Tuple[CancellationRuleSpec, ...],
        finding: DoshaFinding,
        bride: BirthProfile,
        groom: BirthProfile,
    ) -> DoshaFinding:
        if not finding.present:
            return finding

        matched = first_match(chain, bride, groom)
        if matched is None:
            logger.debug(f"{finding.kind.value} dosha not cancelled")
            return finding.model_copy(update={"verdict": CancellationVerdict.NOT_CANCELLED})

        logger.debug(
            f"{finding.kind.value} dosha {matched.verdict.value} by {matched.rule.value}"
        )
        return finding.model_copy(update={
            "verdict": matched.verdict,
            "cancellation_rules": (matched.rule,),
        })

    # ─────────────────────────────────────────────
    # Manglik
    # ─────────────────────────────────────────────

    def _cancel_manglik(
        self,
        profile: BirthProfile,
        finding: DoshaFinding,
        partner: DoshaFinding,
    ) -> DoshaFinding:
        if not finding.present:
            return finding

        rules = []
        if partner.present and levels_compatible(finding.manglik_level, partner.manglik_level):
            rules.append(CancellationRule.MANGLIK_CANCEL_MUTUAL)
        if profile.mars_in_own_or_exalted_sign:
            rules.append(CancellationRule.MANGLIK_CANCEL_OWN_OR_EXALTED)
        if profile.age is not None and profile.age > tables.MANGLIK_AGE_THRESHOLD:
            rules.append(CancellationRule.MANGLIK_CANCEL_AGE)
        if profile.mars_aspected_by_benefic:
            rules.append(CancellationRule.MANGLIK_CANCEL_BENEFIC_ASPECT)

        if not rules:
            logger.debug(f"{finding.party.value} Manglik ({finding.manglik_level.value}) not cancelled")
            return finding.model_copy(update={"verdict": CancellationVerdict.NOT_CANCELLED})

        logger.debug(
            f"{finding.party.value} Manglik cancelled by {[r.value for r in rules]}"
        )
        return finding.model_copy(update={
            "verdict": CancellationVerdict.FULLY_CANCELLED,
            "cancellation_rules": tuple(rules),
        })

    def manglik_match(
        self,
        bride: DoshaFinding,
        groom: DoshaFinding,
    ) -> ManglikMatch:
        """
        Classify how the two Manglik findings balance after cancellation.
        """
        if CancellationRule.MANGLIK_CANCEL_MUTUAL in bride.cancellation_rules:
            return ManglikMatch(balance=ManglikBalance.MUTUAL)

        effective = [
            (party, finding)
            for party, finding in ((Party.BRIDE, bride), (Party.GROOM, groom))
            if finding.is_active
        ]

        if not effective:
            return ManglikMatch(balance=ManglikBalance.NONE)

        if len(effective) == 1:
            party, finding = effective[0]
            if finding.manglik_level == ManglikLevel.PARTIAL:
                return ManglikMatch(balance=ManglikBalance.MINOR_IMBALANCE, imbalanced_party=party)

            balance = ManglikBalance.BRIDE_ONLY if party == Party.BRIDE else ManglikBalance.GROOM_ONLY
            return ManglikMatch(balance=balance, imbalanced_party=party, severe=True)

        # Both still active with levels too far apart to cancel mutually
        if groom.manglik_level.rank > bride.manglik_level.rank:
            party, level = Party.GROOM, groom.manglik_level
        else:
            party, level = Party.BRIDE, bride.manglik_level

        return ManglikMatch(
            balance=ManglikBalance.SIGNIFICANT_IMBALANCE,
            imbalanced_party=party,
            severe=level in (ManglikLevel.FULL, ManglikLevel.DOUBLE),
        )
