import logging
from typing import List, Sequence

from milan.domain.matching import tables
from milan.domain.matching.enums import (
    CancellationVerdict,
    FactorCode,
    FocusArea,
    Guna,
    HardConcern,
    ManglikBalance,
    Party,
    Rating,
    SpecialConsiderationCode,
    TimingTier,
    YoniRelation,
)
from milan.domain.matching.errors import ScoringInvariantError
from milan.domain.matching.guna_scorer import guna_tier
from milan.domain.matching.schemas import (
    BirthProfile,
    CancellationResult,
    CompatibilityReport,
    DoshaFinding,
    GunaScore,
    SpecialConsideration,
)

logger = logging.getLogger(__name__)


MAX_TOTAL_POINTS = 36.0

# (minimum total, rating), checked top down
RATING_THRESHOLDS = (
    (28.0, Rating.EXCELLENT),
    (21.0, Rating.GOOD),
    (18.0, Rating.AVERAGE),
    (14.0, Rating.BELOW_AVERAGE),
)

# Best rating allowed while any hard concern stands
HARD_CONCERN_CAP = Rating.AVERAGE

MULTIPLE_LOW_GUNAS_THRESHOLD = 3

FOCUS_BY_GUNA = {
    Guna.VARNA: FocusArea.SPIRITUAL,
    Guna.VASHYA: FocusArea.COMMUNICATION,
    Guna.GRAHA_MAITRI: FocusArea.COMMUNICATION,
    Guna.YONI: FocusArea.PHYSICAL,
    Guna.GANA: FocusArea.TEMPERAMENT,
    Guna.BHAKOOT: FocusArea.FINANCIAL,
    Guna.TARA: FocusArea.HEALTH,
    Guna.NADI: FocusArea.HEALTH,
}

# Gunas whose dosha can be cancelled, keyed to the finding that carries the verdict
CANCELLABLE_GUNAS = (Guna.BHAKOOT, Guna.NADI)


def rating_for_total(total: float) -> Rating:
    for minimum, rating in RATING_THRESHOLDS:
        if total >= minimum:
            return rating
    return Rating.POOR


def adjusted_points(score: GunaScore, finding: DoshaFinding) -> float:
    """
    Points for a cancellable guna once its dosha verdict is known.
    """
    if not finding.present:
        return score.raw_points
    if finding.verdict == CancellationVerdict.FULLY_CANCELLED:
        return score.max_points
    if finding.verdict == CancellationVerdict.PARTIALLY_CANCELLED:
        return score.max_points / 2
    return 0.0


class CompatibilityAggregator:
    """
    Combines guna scores and cancelled doshas into the final report.
    """

    def aggregate(
        self,
        bride: BirthProfile,
        groom: BirthProfile,
        gunas: Sequence[GunaScore],
        cancellation: CancellationResult,
    ) -> CompatibilityReport:
        doshas = cancellation.doshas
        gunas = self._adjust_gunas(gunas, {Guna.BHAKOOT: doshas.bhakoot, Guna.NADI: doshas.nadi})

        total = sum(score.obtained_points for score in gunas)
        if not 0 <= total <= MAX_TOTAL_POINTS:
            raise ScoringInvariantError(f"Total {total} outside 0..{MAX_TOTAL_POINTS}")

        score_rating = rating_for_total(total)
        hard_concerns = self._hard_concerns(gunas, cancellation)
        rating = score_rating
        if hard_concerns and score_rating.rank < HARD_CONCERN_CAP.rank:
            rating = HARD_CONCERN_CAP
            logger.debug(
                f"Rating capped {score_rating.value} -> {rating.value} by {[c.value for c in hard_concerns]}"
            )

        considerations = self._special_considerations(bride, groom, gunas, cancellation)
        timing = self._timing(rating, hard_concerns, considerations)

        return CompatibilityReport(
            total_points=total,
            max_points=MAX_TOTAL_POINTS,
            percentage=round((total / MAX_TOTAL_POINTS) * 100, 1),
            score_rating=score_rating,
            rating=rating,
            hard_concerns=tuple(hard_concerns),
            gunas=tuple(gunas),
            doshas=doshas.findings(),
            manglik=cancellation.manglik,
            mahendra=doshas.mahendra,
            special_considerations=tuple(considerations),
            timing=timing,
            focus_areas=self._focus_areas(gunas),
        )

    # ─────────────────────────────────────────────
    # Scores
    # ─────────────────────────────────────────────

    def _adjust_gunas(self, gunas, findings) -> List[GunaScore]:
        adjusted: List[GunaScore] = []

        for score in gunas:
            if score.guna not in CANCELLABLE_GUNAS:
                adjusted.append(score)
                continue

            points = adjusted_points(score, findings[score.guna])
            adjusted.append(
                score.model_copy(update={
                    "obtained_points": points,
                    "tier": guna_tier(points, score.max_points),
                })
            )

        return adjusted

    # ─────────────────────────────────────────────
    # Concerns
    # ─────────────────────────────────────────────

    def _hard_concerns(self, gunas, cancellation: CancellationResult) -> List[HardConcern]:
        concerns: List[HardConcern] = []

        if cancellation.doshas.nadi.is_active:
            concerns.append(HardConcern.NADI_DOSHA)
        if cancellation.manglik.severe:
            concerns.append(HardConcern.SEVERE_MANGLIK_IMBALANCE)

        # Only Deva with Rakshasa scores zero on Gana
        gana = next(score for score in gunas if score.guna == Guna.GANA)
        if gana.obtained_points == 0:
            concerns.append(HardConcern.GANA_DEVA_RAKSHASA)

        return concerns

    def _special_considerations(
        self,
        bride: BirthProfile,
        groom: BirthProfile,
        gunas,
        cancellation: CancellationResult,
    ) -> List[SpecialConsideration]:
        """
        Build considerations in their fixed surfacing order.
        """
        doshas = cancellation.doshas
        manglik = cancellation.manglik
        by_guna = {score.guna: score for score in gunas}
        codes = SpecialConsiderationCode

        checks = []
        checks.append((codes.NADI_DOSHA, doshas.nadi.is_active, {}))
        checks.append((codes.BHAKOOT_DOSHA, doshas.bhakoot.is_active, {}))

        manglik_imbalanced = manglik.balance not in (ManglikBalance.NONE, ManglikBalance.MUTUAL)
        checks.append((
            codes.MANGLIK_BRIDE,
            manglik_imbalanced and manglik.imbalanced_party == Party.BRIDE,
            {},
        ))
        checks.append((
            codes.MANGLIK_GROOM,
            manglik_imbalanced and manglik.imbalanced_party == Party.GROOM,
            {},
        ))

        checks.append((codes.GANA_INCOMPATIBLE, by_guna[Guna.GANA].obtained_points == 0, {}))
        checks.append((codes.YONI_ENEMY, by_guna[Guna.YONI].detail == YoniRelation.ENEMY.value, {}))
        checks.append((codes.VEDHA, doshas.vedha.present, {}))
        checks.append((codes.RAJJU, doshas.rajju.present, {}))

        stree_deergha = doshas.stree_deergha
        checks.append((
            codes.STREE_DEERGHA,
            stree_deergha.present,
            {"diff": self._nakshatra_diff(stree_deergha)} if stree_deergha.present else {},
        ))

        low_count = sum(1 for score in gunas if score.is_low)
        checks.append((
            codes.MULTIPLE_LOW_GUNAS,
            low_count >= MULTIPLE_LOW_GUNAS_THRESHOLD,
            {"count": low_count},
        ))

        checks.append((codes.SEVENTH_LORDS_ENEMY, self._seventh_lords_enemies(bride, groom), {}))

        considerations = [
            SpecialConsideration(code=code, params=params)
            for code, triggered, params in checks
            if triggered
        ]

        if not considerations:
            considerations.append(SpecialConsideration(code=codes.NO_CONCERNS))

        return considerations

    def _nakshatra_diff(self, finding: DoshaFinding) -> int:
        for factor in finding.factors:
            if factor.code == FactorCode.NAKSHATRA_DIFF:
                return factor.value
        raise ScoringInvariantError(f"{finding.kind.value} finding carries no nakshatra diff")

    def _seventh_lords_enemies(self, bride: BirthProfile, groom: BirthProfile) -> bool:
        first, second = bride.seventh_house_lord, groom.seventh_house_lord
        if first is None or second is None or first == second:
            return False
        return tables.mutual_enemies(first, second)

    # ─────────────────────────────────────────────
    # Guidance
    # ─────────────────────────────────────────────

    def _timing(self, rating: Rating, hard_concerns, considerations) -> TimingTier:
        if rating == Rating.POOR:
            return TimingTier.RECONSIDER
        if hard_concerns or rating == Rating.BELOW_AVERAGE:
            return TimingTier.EXTENDED_REMEDIES

        has_concerns = any(
            c.code != SpecialConsiderationCode.NO_CONCERNS for c in considerations
        )
        if rating == Rating.AVERAGE or has_concerns:
            return TimingTier.AFTER_REMEDIES
        return TimingTier.IMMEDIATE

    def _focus_areas(self, gunas):
        weak = {FOCUS_BY_GUNA[score.guna] for score in gunas if score.is_low}
        return tuple(area for area in FocusArea if area in weak)
