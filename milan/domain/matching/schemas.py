from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from milan.domain.matching.enums import (
    CancellationRule,
    CancellationVerdict,
    DoshaKind,
    FactorCode,
    FocusArea,
    Guna,
    GunaTier,
    HardConcern,
    ManglikBalance,
    ManglikLevel,
    MarsReference,
    Party,
    Planet,
    Rating,
    Severity,
    SpecialConsiderationCode,
    TimingTier,
)
from milan.domain.matching.tables import rashi_lord


# ─────────────────────────────────────────────
# Input
# ─────────────────────────────────────────────

class BirthProfile(BaseModel):
    """
    Chart facts for one party, as produced by the chart calculator.

    Indices are zero-based: nakshatra 0 is Ashwini, moon_sign 0 is Aries.
    """
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    moon_sign: int = Field(ge=0, le=11)
    nakshatra: int = Field(ge=0, le=26)
    pada: int = Field(ge=1, le=4)

    mars_house_from_lagna: int = Field(ge=1, le=12)
    mars_house_from_moon: int = Field(ge=1, le=12)
    mars_house_from_venus: int = Field(ge=1, le=12)

    moon_sign_lord: Optional[Planet] = None
    age: Optional[int] = Field(default=None, ge=0)
    mars_in_own_or_exalted_sign: bool = False
    mars_aspected_by_benefic: bool = False
    seventh_house_lord: Optional[Planet] = None

    @model_validator(mode="after")
    def check_moon_sign_lord(self):
        expected = rashi_lord(self.moon_sign)
        if self.moon_sign_lord is not None and self.moon_sign_lord != expected:
            raise ValueError(
                f"moon_sign_lord {self.moon_sign_lord.value} does not rule "
                f"moon_sign {self.moon_sign} (expected {expected.value})"
            )
        return self

    @property
    def lord(self) -> Planet:
        return rashi_lord(self.moon_sign)

    def mars_house(self, reference: MarsReference) -> int:
        return {
            MarsReference.LAGNA: self.mars_house_from_lagna,
            MarsReference.MOON: self.mars_house_from_moon,
            MarsReference.VENUS: self.mars_house_from_venus,
        }[reference]


# ─────────────────────────────────────────────
# Guna scores
# ─────────────────────────────────────────────

class GunaScore(BaseModel):
    """
    Score for one of the eight gunas.

    raw_points is the classical table value; obtained_points reflects
    Nadi or Bhakoot cancellation and equals raw_points everywhere else.
    """
    model_config = ConfigDict(frozen=True)

    guna: Guna
    max_points: float
    raw_points: float
    obtained_points: float
    tier: GunaTier
    bride_value: str
    groom_value: str
    detail: Optional[str] = None

    @property
    def is_low(self) -> bool:
        return self.obtained_points < self.max_points / 2


# ─────────────────────────────────────────────
# Doshas
# ─────────────────────────────────────────────

class DoshaFactor(BaseModel):
    """
    One contributing fact behind a dosha, kept for message generation.
    """
    model_config = ConfigDict(frozen=True)

    code: FactorCode
    party: Optional[Party] = None
    house: Optional[int] = None
    nakshatra: Optional[int] = None
    rashi: Optional[int] = None
    planet: Optional[Planet] = None
    value: Optional[Union[int, str]] = None


class DoshaFinding(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: DoshaKind
    party: Optional[Party] = None
    present: bool
    severity: Severity = Severity.NONE
    manglik_level: Optional[ManglikLevel] = None
    factors: Tuple[DoshaFactor, ...] = ()
    verdict: CancellationVerdict = CancellationVerdict.NOT_APPLICABLE
    cancellation_rules: Tuple[CancellationRule, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.present and self.verdict != CancellationVerdict.FULLY_CANCELLED


class MahendraFinding(BaseModel):
    """
    Mahendra is favourable only; its absence is not a dosha.
    """
    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=1, le=27)
    favorable: bool


class DetectedDoshas(BaseModel):
    """
    Every overlay finding for one couple.
    """
    model_config = ConfigDict(frozen=True)

    bride_manglik: DoshaFinding
    groom_manglik: DoshaFinding
    nadi: DoshaFinding
    bhakoot: DoshaFinding
    vedha: DoshaFinding
    rajju: DoshaFinding
    stree_deergha: DoshaFinding
    mahendra: MahendraFinding

    def findings(self) -> Tuple[DoshaFinding, ...]:
        return (
            self.bride_manglik,
            self.groom_manglik,
            self.nadi,
            self.bhakoot,
            self.vedha,
            self.rajju,
            self.stree_deergha,
        )


class ManglikMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    balance: ManglikBalance
    imbalanced_party: Optional[Party] = None
    severe: bool = False


class CancellationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    doshas: DetectedDoshas
    manglik: ManglikMatch


# ─────────────────────────────────────────────
# Report
# ─────────────────────────────────────────────

class SpecialConsideration(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: SpecialConsiderationCode
    params: Dict[str, int] = Field(default_factory=dict)


class CompatibilityReport(BaseModel):
    """
    Language-neutral outcome of one bride/groom comparison.
    """
    model_config = ConfigDict(frozen=True)

    total_points: float
    max_points: float = 36.0
    percentage: float
    score_rating: Rating
    rating: Rating
    hard_concerns: Tuple[HardConcern, ...] = ()

    gunas: Tuple[GunaScore, ...]
    doshas: Tuple[DoshaFinding, ...]
    manglik: ManglikMatch
    mahendra: MahendraFinding

    special_considerations: Tuple[SpecialConsideration, ...]
    timing: TimingTier
    focus_areas: Tuple[FocusArea, ...] = ()

    def guna(self, guna: Guna) -> GunaScore:
        for score in self.gunas:
            if score.guna == guna:
                return score
        raise KeyError(guna.value)

    def dosha(self, kind: DoshaKind, party: Optional[Party] = None) -> DoshaFinding:
        for finding in self.doshas:
            if finding.kind == kind and finding.party == party:
                return finding
        raise KeyError(kind.value)
