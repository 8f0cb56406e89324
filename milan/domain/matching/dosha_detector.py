from typing import List

from milan.domain.matching import tables
from milan.domain.matching.enums import (
    DoshaKind,
    FactorCode,
    ManglikLevel,
    MarsReference,
    Party,
    Planet,
    Rajju,
    Severity,
)
from milan.domain.matching.guna_scorer import bhakoot_distances
from milan.domain.matching.schemas import (
    BirthProfile,
    DetectedDoshas,
    DoshaFactor,
    DoshaFinding,
    MahendraFinding,
)


MARS_FACTOR_CODES = {
    MarsReference.LAGNA: FactorCode.MARS_FROM_LAGNA,
    MarsReference.MOON: FactorCode.MARS_FROM_MOON,
    MarsReference.VENUS: FactorCode.MARS_FROM_VENUS,
}

# Number of triggering reference points -> level
MANGLIK_LEVELS = (
    ManglikLevel.NONE,
    ManglikLevel.PARTIAL,
    ManglikLevel.FULL,
    ManglikLevel.DOUBLE,
)

MANGLIK_SEVERITY = {
    ManglikLevel.NONE: Severity.NONE,
    ManglikLevel.PARTIAL: Severity.MILD,
    ManglikLevel.FULL: Severity.HIGH,
    ManglikLevel.DOUBLE: Severity.SEVERE,
}

RAJJU_SEVERITY = {
    Rajju.SIRO: Severity.SEVERE,
    Rajju.KANTHA: Severity.HIGH,
    Rajju.NABHI: Severity.MODERATE,
    Rajju.KATI: Severity.MILD,
    Rajju.PADA: Severity.LOW,
}


class DoshaDetector:
    """
    Detects the overlay doshas for a couple.

    Current support:
    - Manglik (per party)
    - Nadi, Bhakoot, Vedha, Rajju, Stree Deergha
    - Mahendra (favourable only)

    Findings are raw: every verdict is NOT_APPLICABLE until the
    cancellation engine annotates them.
    """

    def detect(
        self,
        bride: BirthProfile,
        groom: BirthProfile
    ) -> DetectedDoshas:
        return DetectedDoshas(
            bride_manglik=self.detect_manglik(bride, Party.BRIDE),
            groom_manglik=self.detect_manglik(groom, Party.GROOM),
            nadi=self._detect_nadi(bride, groom),
            bhakoot=self._detect_bhakoot(bride, groom),
            vedha=self._detect_vedha(bride, groom),
            rajju=self._detect_rajju(bride, groom),
            stree_deergha=self._detect_stree_deergha(bride, groom),
            mahendra=self.detect_mahendra(bride, groom),
        )

    # ─────────────────────────────────────────────
    # Manglik
    # ─────────────────────────────────────────────

    def detect_manglik(
        self,
        profile: BirthProfile,
        party: Party
    ) -> DoshaFinding:
        """
        Manglik is counted from three reference points: Lagna, Moon
        and Venus. Each one with Mars in a Manglik house raises the level.
        """
        factors: List[DoshaFactor] = []

        for reference in MarsReference:
            house = profile.mars_house(reference)
            if house in tables.MANGLIK_HOUSES:
                factors.append(
                    DoshaFactor(
                        code=MARS_FACTOR_CODES[reference],
                        party=party,
                        house=house,
                        planet=Planet.MARS,
                    )
                )

        level = MANGLIK_LEVELS[len(factors)]
        return DoshaFinding(
            kind=DoshaKind.MANGLIK,
            party=party,
            present=level != ManglikLevel.NONE,
            severity=MANGLIK_SEVERITY[level],
            manglik_level=level,
            factors=tuple(factors),
        )

    # ─────────────────────────────────────────────
    # Nadi & Bhakoot
    # ─────────────────────────────────────────────

    def _detect_nadi(self, bride: BirthProfile, groom: BirthProfile) -> DoshaFinding:
        bride_nadi = tables.nakshatra_nadi(bride.nakshatra)
        present = bride_nadi == tables.nakshatra_nadi(groom.nakshatra)

        factors = ()
        if present:
            factors = (
                DoshaFactor(code=FactorCode.NADI, value=bride_nadi.value),
                DoshaFactor(code=FactorCode.NAKSHATRA, party=Party.BRIDE, nakshatra=bride.nakshatra),
                DoshaFactor(code=FactorCode.NAKSHATRA, party=Party.GROOM, nakshatra=groom.nakshatra),
            )

        return DoshaFinding(
            kind=DoshaKind.NADI,
            present=present,
            severity=Severity.SEVERE if present else Severity.NONE,
            factors=factors,
        )

    def _detect_bhakoot(self, bride: BirthProfile, groom: BirthProfile) -> DoshaFinding:
        forward, backward = bhakoot_distances(bride, groom)
        distances = {forward, backward}

        if distances == tables.BHAKOOT_6_8:
            code, severity = FactorCode.BHAKOOT_6_8, Severity.HIGH
        elif distances == tables.BHAKOOT_2_12:
            code, severity = FactorCode.BHAKOOT_2_12, Severity.MODERATE
        else:
            return DoshaFinding(kind=DoshaKind.BHAKOOT, present=False)

        return DoshaFinding(
            kind=DoshaKind.BHAKOOT,
            present=True,
            severity=severity,
            factors=(
                DoshaFactor(code=code, value=forward),
                DoshaFactor(code=FactorCode.RASHI, party=Party.BRIDE, rashi=bride.moon_sign),
                DoshaFactor(code=FactorCode.RASHI, party=Party.GROOM, rashi=groom.moon_sign),
            ),
        )

    # ─────────────────────────────────────────────
    # Vedha, Rajju, Stree Deergha
    # ─────────────────────────────────────────────

    def _detect_vedha(self, bride: BirthProfile, groom: BirthProfile) -> DoshaFinding:
        pair = frozenset({bride.nakshatra, groom.nakshatra})
        if pair not in tables.VEDHA_PAIRS:
            return DoshaFinding(kind=DoshaKind.VEDHA, present=False)

        return DoshaFinding(
            kind=DoshaKind.VEDHA,
            present=True,
            severity=Severity.HIGH,
            factors=(
                DoshaFactor(code=FactorCode.VEDHA_PAIR, party=Party.BRIDE, nakshatra=bride.nakshatra),
                DoshaFactor(code=FactorCode.VEDHA_PAIR, party=Party.GROOM, nakshatra=groom.nakshatra),
            ),
        )

    def _detect_rajju(self, bride: BirthProfile, groom: BirthProfile) -> DoshaFinding:
        """
        Rajju is present only when both the group and the arudha match.
        Matching groups with opposite arudha are noted at LOW severity.
        """
        bride_rajju = tables.nakshatra_rajju(bride.nakshatra)
        groom_rajju = tables.nakshatra_rajju(groom.nakshatra)

        if bride_rajju != groom_rajju:
            return DoshaFinding(
                kind=DoshaKind.RAJJU,
                present=False,
                factors=(DoshaFactor(code=FactorCode.RAJJU_COMPATIBLE),),
            )

        bride_arudha = tables.nakshatra_arudha(bride.nakshatra)
        groom_arudha = tables.nakshatra_arudha(groom.nakshatra)
        arudha_factors = (
            DoshaFactor(code=FactorCode.ARUDHA, party=Party.BRIDE, value=bride_arudha.value),
            DoshaFactor(code=FactorCode.ARUDHA, party=Party.GROOM, value=groom_arudha.value),
        )

        if bride_arudha != groom_arudha:
            return DoshaFinding(
                kind=DoshaKind.RAJJU,
                present=False,
                severity=Severity.LOW,
                factors=(
                    DoshaFactor(code=FactorCode.RAJJU_SAME_DIFF_ARUDHA, value=bride_rajju.value),
                ) + arudha_factors,
            )

        return DoshaFinding(
            kind=DoshaKind.RAJJU,
            present=True,
            severity=RAJJU_SEVERITY[bride_rajju],
            factors=(
                DoshaFactor(code=FactorCode.RAJJU_SAME_SAME_ARUDHA, value=bride_rajju.value),
            ) + arudha_factors,
        )

    def _detect_stree_deergha(self, bride: BirthProfile, groom: BirthProfile) -> DoshaFinding:
        diff = (groom.nakshatra - bride.nakshatra) % 27
        unmet = diff < tables.STREE_DEERGHA_THRESHOLD

        return DoshaFinding(
            kind=DoshaKind.STREE_DEERGHA,
            present=unmet,
            severity=Severity.MODERATE if unmet else Severity.NONE,
            factors=(DoshaFactor(code=FactorCode.NAKSHATRA_DIFF, value=diff),),
        )

    # ─────────────────────────────────────────────
    # Mahendra
    # ─────────────────────────────────────────────

    def detect_mahendra(
        self,
        bride: BirthProfile,
        groom: BirthProfile
    ) -> MahendraFinding:
        count = (groom.nakshatra - bride.nakshatra) % 27 + 1
        return MahendraFinding(count=count, favorable=count in tables.MAHENDRA_COUNTS)
