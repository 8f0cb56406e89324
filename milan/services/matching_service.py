"""
Kundali Milan (Ashta Koot Matching) Service

Runs the full compatibility pipeline for a bride and groom:
guna scoring, dosha detection, cancellation and aggregation.
"""

import logging
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from milan.domain.matching.aggregator import CompatibilityAggregator
from milan.domain.matching.cancellation import CancellationEngine
from milan.domain.matching.dosha_detector import DoshaDetector
from milan.domain.matching.errors import InvalidBirthProfileError
from milan.domain.matching.guna_scorer import GunaScorer
from milan.domain.matching.schemas import BirthProfile, CompatibilityReport

logger = logging.getLogger(__name__)

ProfileInput = Union[BirthProfile, Dict[str, Any]]


class MatchingService:
    """
    Service to calculate Ashta Koot matching between two birth profiles.

    Collaborators are injectable so each stage can be replaced in tests.
    """

    def __init__(
        self,
        scorer: Optional[GunaScorer] = None,
        detector: Optional[DoshaDetector] = None,
        cancellation: Optional[CancellationEngine] = None,
        aggregator: Optional[CompatibilityAggregator] = None,
    ):
        self.scorer = scorer or GunaScorer()
        self.detector = detector or DoshaDetector()
        self.cancellation = cancellation or CancellationEngine()
        self.aggregator = aggregator or CompatibilityAggregator()

    # ─────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────

    def compute_compatibility(
        self,
        bride: ProfileInput,
        groom: ProfileInput,
    ) -> CompatibilityReport:
        """
        Score the compatibility of a bride and groom.

        Args:
            bride: BirthProfile or a dict of its fields
            groom: BirthProfile or a dict of its fields

        Returns:
            CompatibilityReport with gunas, doshas and guidance codes.

        Raises:
            InvalidBirthProfileError: if either profile fails validation
        """
        bride = self._to_profile(bride, "bride")
        groom = self._to_profile(groom, "groom")

        gunas = self.scorer.score(bride, groom)
        logger.debug(f"Raw guna points: {[(g.guna.value, g.raw_points) for g in gunas]}")

        detected = self.detector.detect(bride, groom)
        logger.debug(f"Doshas present: {[d.kind.value for d in detected.findings() if d.present]}")

        cancellation = self.cancellation.apply(bride, groom, detected)
        logger.debug(f"Manglik balance: {cancellation.manglik.balance.value}")

        report = self.aggregator.aggregate(bride, groom, gunas, cancellation)

        logger.info(
            f"Compatibility computed: {report.total_points}/{report.max_points} "
            f"rating={report.rating.value} (score rating {report.score_rating.value})"
        )
        return report

    # ─────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────

    def _to_profile(self, profile: ProfileInput, role: str) -> BirthProfile:
        if isinstance(profile, BirthProfile):
            return profile

        try:
            return BirthProfile.model_validate(profile)
        except ValidationError as e:
            logger.warning(f"Invalid {role} profile: {e.error_count()} error(s)")
            raise InvalidBirthProfileError(f"Invalid {role} profile: {e}") from e


_default_service = MatchingService()


def compute_compatibility(
    bride: ProfileInput,
    groom: ProfileInput,
) -> CompatibilityReport:
    """
    Module-level entry point using the default pipeline.
    """
    return _default_service.compute_compatibility(bride, groom)
