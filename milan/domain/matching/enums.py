"""
Enumerations shared by the matching domain.

Every value is a stable, language-neutral code. Display text for these
codes lives with the localization layer, never here.
"""

from enum import Enum


class Planet(str, Enum):
    SUN = "SUN"
    MOON = "MOON"
    MARS = "MARS"
    MERCURY = "MERCURY"
    JUPITER = "JUPITER"
    VENUS = "VENUS"
    SATURN = "SATURN"
    RAHU = "RAHU"
    KETU = "KETU"


class Party(str, Enum):
    BRIDE = "BRIDE"
    GROOM = "GROOM"


# ─────────────────────────────────────────────
# Classical classifications
# ─────────────────────────────────────────────

class Varna(str, Enum):
    # Declared lowest to highest rank
    SHUDRA = "SHUDRA"
    VAISHYA = "VAISHYA"
    KSHATRIYA = "KSHATRIYA"
    BRAHMIN = "BRAHMIN"


class Vashya(str, Enum):
    CHATUSHPADA = "CHATUSHPADA"
    MANAVA = "MANAVA"
    JALACHARA = "JALACHARA"
    VANACHARA = "VANACHARA"
    KEETA = "KEETA"


class VashyaRelation(str, Enum):
    SAME = "SAME"
    MUTUAL = "MUTUAL"
    ONE_DOMINATES = "ONE_DOMINATES"
    NEUTRAL = "NEUTRAL"
    HOSTILE = "HOSTILE"


class Yoni(str, Enum):
    HORSE = "HORSE"
    ELEPHANT = "ELEPHANT"
    SHEEP = "SHEEP"
    SERPENT = "SERPENT"
    DOG = "DOG"
    CAT = "CAT"
    RAT = "RAT"
    COW = "COW"
    BUFFALO = "BUFFALO"
    TIGER = "TIGER"
    DEER = "DEER"
    MONKEY = "MONKEY"
    MONGOOSE = "MONGOOSE"
    LION = "LION"


class YoniRelation(str, Enum):
    SAME = "SAME"
    FRIENDLY = "FRIENDLY"
    NEUTRAL = "NEUTRAL"
    UNFRIENDLY = "UNFRIENDLY"
    ENEMY = "ENEMY"


class Gana(str, Enum):
    DEVA = "DEVA"
    MANUSHYA = "MANUSHYA"
    RAKSHASA = "RAKSHASA"


class Nadi(str, Enum):
    ADI = "ADI"
    MADHYA = "MADHYA"
    ANTYA = "ANTYA"


class Element(str, Enum):
    FIRE = "FIRE"
    EARTH = "EARTH"
    AIR = "AIR"
    WATER = "WATER"


class Relationship(str, Enum):
    FRIEND = "FRIEND"
    NEUTRAL = "NEUTRAL"
    ENEMY = "ENEMY"


class Tara(str, Enum):
    # Declared in count order 1..9
    JANMA = "JANMA"
    SAMPAT = "SAMPAT"
    VIPAT = "VIPAT"
    KSHEMA = "KSHEMA"
    PRATYARI = "PRATYARI"
    SADHANA = "SADHANA"
    VADHA = "VADHA"
    MITRA = "MITRA"
    PARAMA_MITRA = "PARAMA_MITRA"


class Rajju(str, Enum):
    # Declared least to most serious
    PADA = "PADA"
    KATI = "KATI"
    NABHI = "NABHI"
    KANTHA = "KANTHA"
    SIRO = "SIRO"


class Arudha(str, Enum):
    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class MarsReference(str, Enum):
    LAGNA = "LAGNA"
    MOON = "MOON"
    VENUS = "VENUS"


# ─────────────────────────────────────────────
# Scoring & findings
# ─────────────────────────────────────────────

class Guna(str, Enum):
    VARNA = "VARNA"
    VASHYA = "VASHYA"
    TARA = "TARA"
    YONI = "YONI"
    GRAHA_MAITRI = "GRAHA_MAITRI"
    GANA = "GANA"
    BHAKOOT = "BHAKOOT"
    NADI = "NADI"


class GunaTier(str, Enum):
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    AVERAGE = "AVERAGE"
    WEAK = "WEAK"
    INCOMPATIBLE = "INCOMPATIBLE"


class DoshaKind(str, Enum):
    MANGLIK = "MANGLIK"
    NADI = "NADI"
    BHAKOOT = "BHAKOOT"
    VEDHA = "VEDHA"
    RAJJU = "RAJJU"
    STREE_DEERGHA = "STREE_DEERGHA"


class Severity(str, Enum):
    # Declared least to most severe
    NONE = "NONE"
    LOW = "LOW"
    MILD = "MILD"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    SEVERE = "SEVERE"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)


class ManglikLevel(str, Enum):
    NONE = "NONE"
    PARTIAL = "PARTIAL"
    FULL = "FULL"
    DOUBLE = "DOUBLE"

    @property
    def rank(self) -> int:
        return list(ManglikLevel).index(self)


class ManglikBalance(str, Enum):
    NONE = "NONE"
    MUTUAL = "MUTUAL"
    MINOR_IMBALANCE = "MINOR_IMBALANCE"
    BRIDE_ONLY = "BRIDE_ONLY"
    GROOM_ONLY = "GROOM_ONLY"
    SIGNIFICANT_IMBALANCE = "SIGNIFICANT_IMBALANCE"


class FactorCode(str, Enum):
    MARS_FROM_LAGNA = "MARS_FROM_LAGNA"
    MARS_FROM_MOON = "MARS_FROM_MOON"
    MARS_FROM_VENUS = "MARS_FROM_VENUS"
    NAKSHATRA = "NAKSHATRA"
    RASHI = "RASHI"
    NADI = "NADI"
    BHAKOOT_2_12 = "BHAKOOT_2_12"
    BHAKOOT_6_8 = "BHAKOOT_6_8"
    VEDHA_PAIR = "VEDHA_PAIR"
    RAJJU_COMPATIBLE = "RAJJU_COMPATIBLE"
    RAJJU_SAME_DIFF_ARUDHA = "RAJJU_SAME_DIFF_ARUDHA"
    RAJJU_SAME_SAME_ARUDHA = "RAJJU_SAME_SAME_ARUDHA"
    ARUDHA = "ARUDHA"
    NAKSHATRA_DIFF = "NAKSHATRA_DIFF"


class CancellationVerdict(str, Enum):
    NOT_APPLICABLE = "NOT_APPLICABLE"
    NOT_CANCELLED = "NOT_CANCELLED"
    PARTIALLY_CANCELLED = "PARTIALLY_CANCELLED"
    FULLY_CANCELLED = "FULLY_CANCELLED"


class CancellationRule(str, Enum):
    NADI_CANCEL_SAME_NAK_DIFF_RASHI = "NADI_CANCEL_SAME_NAK_DIFF_RASHI"
    NADI_CANCEL_SAME_RASHI_DIFF_NAK = "NADI_CANCEL_SAME_RASHI_DIFF_NAK"
    NADI_CANCEL_DIFF_PADA = "NADI_CANCEL_DIFF_PADA"
    NADI_CANCEL_SPECIAL_PAIR = "NADI_CANCEL_SPECIAL_PAIR"
    NADI_CANCEL_LORDS_FRIENDS = "NADI_CANCEL_LORDS_FRIENDS"
    NADI_CANCEL_SAME_NAK_LORD = "NADI_CANCEL_SAME_NAK_LORD"
    BHAKOOT_CANCEL_SAME_LORD = "BHAKOOT_CANCEL_SAME_LORD"
    BHAKOOT_CANCEL_MUTUAL_FRIENDS = "BHAKOOT_CANCEL_MUTUAL_FRIENDS"
    BHAKOOT_CANCEL_EXALTATION = "BHAKOOT_CANCEL_EXALTATION"
    BHAKOOT_CANCEL_FRIENDLY = "BHAKOOT_CANCEL_FRIENDLY"
    BHAKOOT_CANCEL_ELEMENT = "BHAKOOT_CANCEL_ELEMENT"
    MANGLIK_CANCEL_MUTUAL = "MANGLIK_CANCEL_MUTUAL"
    MANGLIK_CANCEL_OWN_OR_EXALTED = "MANGLIK_CANCEL_OWN_OR_EXALTED"
    MANGLIK_CANCEL_AGE = "MANGLIK_CANCEL_AGE"
    MANGLIK_CANCEL_BENEFIC_ASPECT = "MANGLIK_CANCEL_BENEFIC_ASPECT"


# ─────────────────────────────────────────────
# Report
# ─────────────────────────────────────────────

class Rating(str, Enum):
    # Declared best to worst
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    AVERAGE = "AVERAGE"
    BELOW_AVERAGE = "BELOW_AVERAGE"
    POOR = "POOR"

    @property
    def rank(self) -> int:
        return list(Rating).index(self)


class HardConcern(str, Enum):
    NADI_DOSHA = "NADI_DOSHA"
    SEVERE_MANGLIK_IMBALANCE = "SEVERE_MANGLIK_IMBALANCE"
    GANA_DEVA_RAKSHASA = "GANA_DEVA_RAKSHASA"


class SpecialConsiderationCode(str, Enum):
    # Declared in surfacing priority order
    NADI_DOSHA = "NADI_DOSHA"
    BHAKOOT_DOSHA = "BHAKOOT_DOSHA"
    MANGLIK_BRIDE = "MANGLIK_BRIDE"
    MANGLIK_GROOM = "MANGLIK_GROOM"
    GANA_INCOMPATIBLE = "GANA_INCOMPATIBLE"
    YONI_ENEMY = "YONI_ENEMY"
    VEDHA = "VEDHA"
    RAJJU = "RAJJU"
    STREE_DEERGHA = "STREE_DEERGHA"
    MULTIPLE_LOW_GUNAS = "MULTIPLE_LOW_GUNAS"
    SEVENTH_LORDS_ENEMY = "SEVENTH_LORDS_ENEMY"
    NO_CONCERNS = "NO_CONCERNS"


class TimingTier(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    AFTER_REMEDIES = "AFTER_REMEDIES"
    EXTENDED_REMEDIES = "EXTENDED_REMEDIES"
    RECONSIDER = "RECONSIDER"


class FocusArea(str, Enum):
    SPIRITUAL = "SPIRITUAL"
    COMMUNICATION = "COMMUNICATION"
    PHYSICAL = "PHYSICAL"
    TEMPERAMENT = "TEMPERAMENT"
    FINANCIAL = "FINANCIAL"
    HEALTH = "HEALTH"
