from typing import List, Optional

from milan.domain.matching import tables
from milan.domain.matching.enums import Gana, Guna, GunaTier, Relationship, Tara, Varna
from milan.domain.matching.errors import ScoringInvariantError
from milan.domain.matching.schemas import BirthProfile, GunaScore


GUNA_MAX_POINTS = {
    Guna.VARNA: 1.0,
    Guna.VASHYA: 2.0,
    Guna.TARA: 3.0,
    Guna.YONI: 4.0,
    Guna.GRAHA_MAITRI: 5.0,
    Guna.GANA: 6.0,
    Guna.BHAKOOT: 7.0,
    Guna.NADI: 8.0,
}

AUSPICIOUS_TARAS = {Tara.SAMPAT, Tara.KSHEMA, Tara.SADHANA, Tara.MITRA, Tara.PARAMA_MITRA}

# Keyed by the unordered pair of both parties' relations toward each other
GRAHA_MAITRI_POINTS = {
    frozenset({Relationship.FRIEND}): 5.0,
    frozenset({Relationship.FRIEND, Relationship.NEUTRAL}): 4.0,
    frozenset({Relationship.NEUTRAL}): 3.0,
    frozenset({Relationship.FRIEND, Relationship.ENEMY}): 2.0,
    frozenset({Relationship.NEUTRAL, Relationship.ENEMY}): 1.0,
    frozenset({Relationship.ENEMY}): 0.5,
}

GANA_POINTS = {
    frozenset({Gana.DEVA}): 6.0,
    frozenset({Gana.MANUSHYA}): 6.0,
    frozenset({Gana.RAKSHASA}): 6.0,
    frozenset({Gana.DEVA, Gana.MANUSHYA}): 5.0,
    frozenset({Gana.MANUSHYA, Gana.RAKSHASA}): 2.0,
    frozenset({Gana.DEVA, Gana.RAKSHASA}): 0.0,
}


def guna_tier(obtained: float, maximum: float) -> GunaTier:
    ratio = obtained / maximum
    if ratio >= 1:
        return GunaTier.EXCELLENT
    if ratio >= 0.7:
        return GunaTier.GOOD
    if ratio >= 0.5:
        return GunaTier.AVERAGE
    if ratio > 0:
        return GunaTier.WEAK
    return GunaTier.INCOMPATIBLE


def tara_for_distance(distance: int) -> Tara:
    """Map a nakshatra distance (0..26) onto its Tara; zero wraps to the ninth."""
    number = 9 if distance == 0 else (distance - 1) % 9 + 1
    return list(Tara)[number - 1]


def bhakoot_distances(bride: BirthProfile, groom: BirthProfile):
    """
    Rashi distance counted both ways, each in 1..12.

    Returns:
        (groom counted from bride, bride counted from groom)
    """
    forward = (groom.moon_sign - bride.moon_sign) % 12 + 1
    backward = (bride.moon_sign - groom.moon_sign) % 12 + 1
    return forward, backward


class GunaScorer:
    """
    Scores the eight Ashta Koot gunas for a bride and groom.

    Every guna is computed independently from the classical tables.
    Nadi and Bhakoot are reported raw here; cancellation is applied
    later by the aggregator.
    """

    def score(
        self,
        bride: BirthProfile,
        groom: BirthProfile
    ) -> List[GunaScore]:
        return [
            self._score_varna(bride, groom),
            self._score_vashya(bride, groom),
            self._score_tara(bride, groom),
            self._score_yoni(bride, groom),
            self._score_graha_maitri(bride, groom),
            self._score_gana(bride, groom),
            self._score_bhakoot(bride, groom),
            self._score_nadi(bride, groom),
        ]

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    def _build(
        self,
        guna: Guna,
        points: float,
        bride_value: str,
        groom_value: str,
        detail: Optional[str] = None,
    ) -> GunaScore:
        maximum = GUNA_MAX_POINTS[guna]
        if not 0 <= points <= maximum or (points * 2) != int(points * 2):
            raise ScoringInvariantError(
                f"{guna.value} scored {points}, outside 0..{maximum} in half points"
            )

        return GunaScore(
            guna=guna,
            max_points=maximum,
            raw_points=points,
            obtained_points=points,
            tier=guna_tier(points, maximum),
            bride_value=bride_value,
            groom_value=groom_value,
            detail=detail,
        )

    # ─────────────────────────────────────────────
    # Per-Guna Calculations
    # ─────────────────────────────────────────────

    def _score_varna(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        """Varna: groom's rank equal to or above the bride's earns the point."""
        order = list(Varna)
        bride_varna = tables.rashi_varna(bride.moon_sign)
        groom_varna = tables.rashi_varna(groom.moon_sign)

        points = 1.0 if order.index(groom_varna) >= order.index(bride_varna) else 0.0
        return self._build(Guna.VARNA, points, bride_varna.value, groom_varna.value)

    def _score_vashya(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        """Vashya: directional, read from the groom's row."""
        bride_vashya = tables.rashi_vashya(bride.moon_sign)
        groom_vashya = tables.rashi_vashya(groom.moon_sign)

        relation = tables.vashya_relation(groom_vashya, bride_vashya)
        return self._build(
            Guna.VASHYA,
            tables.VASHYA_POINTS[relation],
            bride_vashya.value,
            groom_vashya.value,
            detail=relation.value,
        )

    def _score_tara(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        """Tara: distance both ways, each checked for an auspicious star."""
        from_bride = tara_for_distance((groom.nakshatra - bride.nakshatra) % 27)
        from_groom = tara_for_distance((bride.nakshatra - groom.nakshatra) % 27)

        auspicious = sum(
            1 for tara in (from_bride, from_groom) if tara in AUSPICIOUS_TARAS
        )
        points = {2: 3.0, 1: 1.5, 0: 0.0}[auspicious]

        return self._build(
            Guna.TARA,
            points,
            tables.nakshatra_name(bride.nakshatra),
            tables.nakshatra_name(groom.nakshatra),
            detail=f"{from_bride.value}/{from_groom.value}",
        )

    def _score_yoni(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        bride_yoni = tables.nakshatra_yoni(bride.nakshatra)
        groom_yoni = tables.nakshatra_yoni(groom.nakshatra)

        relation = tables.yoni_relation(bride_yoni, groom_yoni)
        return self._build(
            Guna.YONI,
            tables.YONI_POINTS[relation],
            bride_yoni.value,
            groom_yoni.value,
            detail=relation.value,
        )

    def _score_graha_maitri(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        """Graha Maitri: friendship between the Moon-sign lords."""
        bride_lord = bride.lord
        groom_lord = groom.lord

        if bride_lord == groom_lord:
            return self._build(
                Guna.GRAHA_MAITRI, 5.0, bride_lord.value, groom_lord.value, detail="SAME_LORD"
            )

        relations = frozenset({
            tables.relationship(bride_lord, groom_lord),
            tables.relationship(groom_lord, bride_lord),
        })
        return self._build(
            Guna.GRAHA_MAITRI,
            GRAHA_MAITRI_POINTS[relations],
            bride_lord.value,
            groom_lord.value,
            detail="_".join(sorted(r.value for r in relations)),
        )

    def _score_gana(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        bride_gana = tables.nakshatra_gana(bride.nakshatra)
        groom_gana = tables.nakshatra_gana(groom.nakshatra)

        return self._build(
            Guna.GANA,
            GANA_POINTS[frozenset({bride_gana, groom_gana})],
            bride_gana.value,
            groom_gana.value,
        )

    def _score_bhakoot(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        """Bhakoot: 2/12 and 6/8 placements of the Moon signs score nothing."""
        forward, backward = bhakoot_distances(bride, groom)
        distances = {forward, backward}

        afflicted = distances == tables.BHAKOOT_2_12 or distances == tables.BHAKOOT_6_8
        return self._build(
            Guna.BHAKOOT,
            0.0 if afflicted else 7.0,
            tables.sign_name(bride.moon_sign),
            tables.sign_name(groom.moon_sign),
            detail=f"{forward}/{backward}",
        )

    def _score_nadi(self, bride: BirthProfile, groom: BirthProfile) -> GunaScore:
        bride_nadi = tables.nakshatra_nadi(bride.nakshatra)
        groom_nadi = tables.nakshatra_nadi(groom.nakshatra)

        return self._build(
            Guna.NADI,
            0.0 if bride_nadi == groom_nadi else 8.0,
            bride_nadi.value,
            groom_nadi.value,
        )
