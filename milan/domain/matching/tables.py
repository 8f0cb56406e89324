"""
Classical reference tables for Ashta Koot matching.

Everything here is read-only data indexed by nakshatra (0 = Ashwini),
rashi (0 = Aries) or enum declaration order. Lookups raise
ReferenceTableError on a miss; they never fall back to a default.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Tuple

from milan.domain.matching.enums import (
    Arudha,
    Element,
    Gana,
    Nadi,
    Planet,
    Rajju,
    Relationship,
    Varna,
    Vashya,
    VashyaRelation,
    Yoni,
    YoniRelation,
)
from milan.domain.matching.errors import ReferenceTableError

NAKSHATRA_COUNT = 27
RASHI_COUNT = 12

# ─────────────────────────────────────────────
# Names
# ─────────────────────────────────────────────

NAKSHATRAS: Tuple[str, ...] = (
    "Ashwini", "Bharani", "Krittika", "Rohini", "Mrigashira", "Ardra",
    "Punarvasu", "Pushya", "Ashlesha", "Magha", "Purva Phalguni",
    "Uttara Phalguni", "Hasta", "Chitra", "Swati", "Vishakha",
    "Anuradha", "Jyeshtha", "Mula", "Purva Ashadha", "Uttara Ashadha",
    "Shravana", "Dhanishta", "Shatabhisha", "Purva Bhadrapada",
    "Uttara Bhadrapada", "Revati",
)

SIGNS: Tuple[str, ...] = (
    "Aries", "Taurus", "Gemini", "Cancer",
    "Leo", "Virgo", "Libra", "Scorpio",
    "Sagittarius", "Capricorn", "Aquarius", "Pisces",
)

# ─────────────────────────────────────────────
# Rashi tables
# ─────────────────────────────────────────────

RASHI_LORDS: Tuple[Planet, ...] = (
    Planet.MARS, Planet.VENUS, Planet.MERCURY, Planet.MOON,
    Planet.SUN, Planet.MERCURY, Planet.VENUS, Planet.MARS,
    Planet.JUPITER, Planet.SATURN, Planet.SATURN, Planet.JUPITER,
)

RASHI_ELEMENTS: Tuple[Element, ...] = (
    Element.FIRE, Element.EARTH, Element.AIR, Element.WATER,
) * 3

# Varna follows the element of the Moon sign
ELEMENT_VARNA = MappingProxyType({
    Element.WATER: Varna.BRAHMIN,
    Element.FIRE: Varna.KSHATRIYA,
    Element.EARTH: Varna.VAISHYA,
    Element.AIR: Varna.SHUDRA,
})

RASHI_VASHYA: Tuple[Vashya, ...] = (
    Vashya.CHATUSHPADA,  # Aries
    Vashya.CHATUSHPADA,  # Taurus
    Vashya.MANAVA,       # Gemini
    Vashya.JALACHARA,    # Cancer
    Vashya.VANACHARA,    # Leo
    Vashya.MANAVA,       # Virgo
    Vashya.MANAVA,       # Libra
    Vashya.KEETA,        # Scorpio
    Vashya.MANAVA,       # Sagittarius
    Vashya.JALACHARA,    # Capricorn
    Vashya.MANAVA,       # Aquarius
    Vashya.JALACHARA,    # Pisces
)

EXALTATION_SIGNS = MappingProxyType({
    Planet.SUN: 0,
    Planet.MOON: 1,
    Planet.MARS: 9,
    Planet.MERCURY: 5,
    Planet.JUPITER: 3,
    Planet.VENUS: 11,
    Planet.SATURN: 6,
    Planet.RAHU: 1,
    Planet.KETU: 7,
})

# ─────────────────────────────────────────────
# Nakshatra tables
# ─────────────────────────────────────────────

NAKSHATRA_LORD_CYCLE: Tuple[Planet, ...] = (
    Planet.KETU, Planet.VENUS, Planet.SUN, Planet.MOON, Planet.MARS,
    Planet.RAHU, Planet.JUPITER, Planet.SATURN, Planet.MERCURY,
)

NAKSHATRA_LORDS: Tuple[Planet, ...] = NAKSHATRA_LORD_CYCLE * 3

_H, _E, _SH, _SE = Yoni.HORSE, Yoni.ELEPHANT, Yoni.SHEEP, Yoni.SERPENT
_DO, _CA, _RA, _CO = Yoni.DOG, Yoni.CAT, Yoni.RAT, Yoni.COW
_BU, _TI, _DE, _MO = Yoni.BUFFALO, Yoni.TIGER, Yoni.DEER, Yoni.MONKEY
_MG, _LI = Yoni.MONGOOSE, Yoni.LION

NAKSHATRA_YONI: Tuple[Yoni, ...] = (
    _H, _E, _SH, _SE, _SE, _DO, _CA, _SH, _CA,
    _RA, _RA, _CO, _BU, _TI, _BU, _TI, _DE, _DE,
    _DO, _MO, _MG, _MO, _LI, _H, _LI, _CO, _E,
)

_D, _M, _R = Gana.DEVA, Gana.MANUSHYA, Gana.RAKSHASA

NAKSHATRA_GANA: Tuple[Gana, ...] = (
    _D, _M, _R, _M, _D, _M, _D, _D, _R,
    _R, _M, _M, _D, _R, _D, _R, _D, _R,
    _R, _M, _M, _D, _R, _R, _M, _M, _D,
)

NAKSHATRA_NADI: Tuple[Nadi, ...] = (
    Nadi.ADI, Nadi.MADHYA, Nadi.ANTYA, Nadi.ANTYA, Nadi.MADHYA, Nadi.ADI,
) * 4 + (Nadi.ADI, Nadi.MADHYA, Nadi.ANTYA)

# Rajju runs foot to head and back down within each block of nine
RAJJU_CYCLE: Tuple[Rajju, ...] = (
    Rajju.PADA, Rajju.KATI, Rajju.NABHI, Rajju.KANTHA, Rajju.SIRO,
    Rajju.KANTHA, Rajju.NABHI, Rajju.KATI, Rajju.PADA,
)

NAKSHATRA_RAJJU: Tuple[Rajju, ...] = RAJJU_CYCLE * 3

NAKSHATRA_ARUDHA: Tuple[Arudha, ...] = (
    (Arudha.ASCENDING,) * 5 + (Arudha.DESCENDING,) * 4
) * 3

# ─────────────────────────────────────────────
# Relation matrices
# ─────────────────────────────────────────────

# Rows and columns follow Yoni declaration order. 4 = same, 0 = sworn enemy.
_YONI_POINTS: Tuple[Tuple[int, ...], ...] = (
    (4, 2, 2, 3, 2, 2, 2, 1, 0, 1, 3, 3, 2, 1),
    (2, 4, 3, 3, 2, 2, 2, 2, 3, 1, 2, 3, 2, 0),
    (2, 3, 4, 2, 1, 2, 1, 3, 3, 1, 2, 0, 3, 1),
    (3, 3, 2, 4, 2, 1, 1, 1, 1, 2, 2, 2, 0, 2),
    (2, 2, 1, 2, 4, 2, 1, 2, 2, 1, 0, 2, 1, 1),
    (2, 2, 2, 1, 2, 4, 0, 2, 2, 1, 3, 3, 2, 1),
    (2, 2, 1, 1, 1, 0, 4, 2, 2, 2, 2, 2, 1, 2),
    (1, 2, 3, 1, 2, 2, 2, 4, 3, 0, 3, 2, 2, 1),
    (0, 3, 3, 1, 2, 2, 2, 3, 4, 1, 2, 2, 2, 1),
    (1, 1, 1, 2, 1, 1, 2, 0, 1, 4, 1, 1, 2, 1),
    (3, 2, 2, 2, 0, 3, 2, 3, 2, 1, 4, 2, 2, 1),
    (3, 3, 0, 2, 2, 3, 2, 2, 2, 1, 2, 4, 3, 2),
    (2, 2, 3, 0, 1, 2, 1, 2, 2, 2, 2, 3, 4, 2),
    (1, 0, 1, 2, 1, 1, 2, 1, 1, 1, 1, 2, 2, 4),
)

_YONI_POINT_RELATION = {
    4: YoniRelation.SAME,
    3: YoniRelation.FRIENDLY,
    2: YoniRelation.NEUTRAL,
    1: YoniRelation.UNFRIENDLY,
    0: YoniRelation.ENEMY,
}

YONI_MATRIX: Tuple[Tuple[YoniRelation, ...], ...] = tuple(
    tuple(_YONI_POINT_RELATION[points] for points in row)
    for row in _YONI_POINTS
)

_F, _N, _X = Relationship.FRIEND, Relationship.NEUTRAL, Relationship.ENEMY

# Natural (Naisargika) friendship, read as "how the row planet regards the column planet"
PLANET_RELATIONS: Dict[Planet, Dict[Planet, Relationship]] = {
    Planet.SUN: {
        Planet.MOON: _F, Planet.MARS: _F, Planet.MERCURY: _N, Planet.JUPITER: _F,
        Planet.VENUS: _X, Planet.SATURN: _X, Planet.RAHU: _X, Planet.KETU: _X,
    },
    Planet.MOON: {
        Planet.SUN: _F, Planet.MARS: _N, Planet.MERCURY: _F, Planet.JUPITER: _N,
        Planet.VENUS: _N, Planet.SATURN: _N, Planet.RAHU: _X, Planet.KETU: _X,
    },
    Planet.MARS: {
        Planet.SUN: _F, Planet.MOON: _F, Planet.MERCURY: _X, Planet.JUPITER: _F,
        Planet.VENUS: _N, Planet.SATURN: _N, Planet.RAHU: _X, Planet.KETU: _F,
    },
    Planet.MERCURY: {
        Planet.SUN: _F, Planet.MOON: _X, Planet.MARS: _N, Planet.JUPITER: _N,
        Planet.VENUS: _F, Planet.SATURN: _N, Planet.RAHU: _F, Planet.KETU: _N,
    },
    Planet.JUPITER: {
        Planet.SUN: _F, Planet.MOON: _F, Planet.MARS: _F, Planet.MERCURY: _X,
        Planet.VENUS: _X, Planet.SATURN: _N, Planet.RAHU: _N, Planet.KETU: _F,
    },
    Planet.VENUS: {
        Planet.SUN: _X, Planet.MOON: _X, Planet.MARS: _N, Planet.MERCURY: _F,
        Planet.JUPITER: _N, Planet.SATURN: _F, Planet.RAHU: _F, Planet.KETU: _F,
    },
    Planet.SATURN: {
        Planet.SUN: _X, Planet.MOON: _X, Planet.MARS: _X, Planet.MERCURY: _F,
        Planet.JUPITER: _N, Planet.VENUS: _F, Planet.RAHU: _F, Planet.KETU: _N,
    },
    Planet.RAHU: {
        Planet.SUN: _X, Planet.MOON: _X, Planet.MARS: _X, Planet.MERCURY: _F,
        Planet.JUPITER: _N, Planet.VENUS: _F, Planet.SATURN: _F, Planet.KETU: _N,
    },
    Planet.KETU: {
        Planet.SUN: _X, Planet.MOON: _X, Planet.MARS: _F, Planet.MERCURY: _N,
        Planet.JUPITER: _F, Planet.VENUS: _F, Planet.SATURN: _N, Planet.RAHU: _N,
    },
}

_S = VashyaRelation.SAME
_MU = VashyaRelation.MUTUAL
_O = VashyaRelation.ONE_DOMINATES
_NE = VashyaRelation.NEUTRAL
_HO = VashyaRelation.HOSTILE

# Groom row, bride column, both in Vashya declaration order
VASHYA_MATRIX: Tuple[Tuple[VashyaRelation, ...], ...] = (
    (_S, _MU, _O, _NE, _O),
    (_MU, _S, _NE, _HO, _O),
    (_O, _NE, _S, _O, _MU),
    (_O, _HO, _NE, _S, _HO),
    (_NE, _NE, _MU, _HO, _S),
)

VASHYA_POINTS = MappingProxyType({
    VashyaRelation.SAME: 2.0,
    VashyaRelation.MUTUAL: 1.5,
    VashyaRelation.ONE_DOMINATES: 1.0,
    VashyaRelation.NEUTRAL: 0.5,
    VashyaRelation.HOSTILE: 0.0,
})

YONI_POINTS = MappingProxyType({
    YoniRelation.SAME: 4.0,
    YoniRelation.FRIENDLY: 3.0,
    YoniRelation.NEUTRAL: 2.0,
    YoniRelation.UNFRIENDLY: 1.0,
    YoniRelation.ENEMY: 0.0,
})

# ─────────────────────────────────────────────
# Dosha constants
# ─────────────────────────────────────────────

VEDHA_PAIRS: FrozenSet[FrozenSet[int]] = frozenset(
    frozenset(pair) for pair in (
        (0, 17), (1, 16), (2, 15), (3, 14), (5, 21), (6, 20),
        (7, 19), (8, 18), (9, 26), (10, 25), (11, 24), (12, 23),
        # Mrigashira, Chitra and Dhanishta obstruct one another
        (4, 13), (4, 22), (13, 22),
    )
)

# Same-Nadi pairs traditionally exempted from the dosha
NADI_EXEMPT_PAIRS: FrozenSet[FrozenSet[int]] = frozenset(
    frozenset(pair) for pair in (
        (3, 9),    # Rohini / Magha
        (2, 3),    # Krittika / Rohini
        (21, 26),  # Shravana / Revati
        (7, 25),   # Pushya / Uttara Bhadrapada
        (5, 17),   # Ardra / Jyeshtha
    )
)

MAHENDRA_COUNTS: FrozenSet[int] = frozenset({4, 7, 10, 13, 16, 19, 22, 25})

MANGLIK_HOUSES: FrozenSet[int] = frozenset({1, 2, 4, 7, 8, 12})
MANGLIK_AGE_THRESHOLD = 28
STREE_DEERGHA_THRESHOLD = 13

# Bhakoot distance pairs (counted both ways) that constitute the dosha
BHAKOOT_2_12: FrozenSet[int] = frozenset({2, 12})
BHAKOOT_6_8: FrozenSet[int] = frozenset({6, 8})


# ─────────────────────────────────────────────
# Lookups
# ─────────────────────────────────────────────

def _nakshatra_entry(table, nakshatra: int, table_name: str):
    if not 0 <= nakshatra < NAKSHATRA_COUNT or nakshatra >= len(table):
        raise ReferenceTableError(f"No {table_name} entry for nakshatra {nakshatra}")
    return table[nakshatra]


def _rashi_entry(table, rashi: int, table_name: str):
    if not 0 <= rashi < RASHI_COUNT or rashi >= len(table):
        raise ReferenceTableError(f"No {table_name} entry for rashi {rashi}")
    return table[rashi]


def nakshatra_name(nakshatra: int) -> str:
    return _nakshatra_entry(NAKSHATRAS, nakshatra, "name")


def sign_name(rashi: int) -> str:
    return _rashi_entry(SIGNS, rashi, "name")


def rashi_lord(rashi: int) -> Planet:
    return _rashi_entry(RASHI_LORDS, rashi, "lord")


def rashi_element(rashi: int) -> Element:
    return _rashi_entry(RASHI_ELEMENTS, rashi, "element")


def rashi_varna(rashi: int) -> Varna:
    return ELEMENT_VARNA[rashi_element(rashi)]


def rashi_vashya(rashi: int) -> Vashya:
    return _rashi_entry(RASHI_VASHYA, rashi, "vashya")


def exaltation_sign(planet: Planet) -> int:
    if planet not in EXALTATION_SIGNS:
        raise ReferenceTableError(f"No exaltation sign for {planet.value}")
    return EXALTATION_SIGNS[planet]


def nakshatra_lord(nakshatra: int) -> Planet:
    return _nakshatra_entry(NAKSHATRA_LORDS, nakshatra, "lord")


def nakshatra_yoni(nakshatra: int) -> Yoni:
    return _nakshatra_entry(NAKSHATRA_YONI, nakshatra, "yoni")


def nakshatra_gana(nakshatra: int) -> Gana:
    return _nakshatra_entry(NAKSHATRA_GANA, nakshatra, "gana")


def nakshatra_nadi(nakshatra: int) -> Nadi:
    return _nakshatra_entry(NAKSHATRA_NADI, nakshatra, "nadi")


def nakshatra_rajju(nakshatra: int) -> Rajju:
    return _nakshatra_entry(NAKSHATRA_RAJJU, nakshatra, "rajju")


def nakshatra_arudha(nakshatra: int) -> Arudha:
    return _nakshatra_entry(NAKSHATRA_ARUDHA, nakshatra, "arudha")


def yoni_relation(first: Yoni, second: Yoni) -> YoniRelation:
    order = list(Yoni)
    return YONI_MATRIX[order.index(first)][order.index(second)]


def vashya_relation(groom: Vashya, bride: Vashya) -> VashyaRelation:
    order = list(Vashya)
    return VASHYA_MATRIX[order.index(groom)][order.index(bride)]


def relationship(of: Planet, toward: Planet) -> Relationship:
    """
    How planet `of` naturally regards planet `toward`.

    A planet has no entry for itself; callers compare identity first.
    """
    try:
        return PLANET_RELATIONS[of][toward]
    except KeyError:
        raise ReferenceTableError(
            f"No relationship entry for {of.value} toward {toward.value}"
        ) from None


def mutual_friends(first: Planet, second: Planet) -> bool:
    return (
        relationship(first, second) == Relationship.FRIEND
        and relationship(second, first) == Relationship.FRIEND
    )


def mutual_enemies(first: Planet, second: Planet) -> bool:
    return (
        relationship(first, second) == Relationship.ENEMY
        and relationship(second, first) == Relationship.ENEMY
    )


# ─────────────────────────────────────────────
# Verification
# ─────────────────────────────────────────────

def verify_tables() -> None:
    """
    Check every table for shape and coverage.

    Raises:
        ReferenceTableError: if any table is malformed
    """
    nakshatra_tables = {
        "name": NAKSHATRAS,
        "lord": NAKSHATRA_LORDS,
        "yoni": NAKSHATRA_YONI,
        "gana": NAKSHATRA_GANA,
        "nadi": NAKSHATRA_NADI,
        "rajju": NAKSHATRA_RAJJU,
        "arudha": NAKSHATRA_ARUDHA,
    }
    for table_name, table in nakshatra_tables.items():
        if len(table) != NAKSHATRA_COUNT:
            raise ReferenceTableError(
                f"Nakshatra {table_name} table has {len(table)} entries, expected {NAKSHATRA_COUNT}"
            )

    rashi_tables = {
        "name": SIGNS,
        "lord": RASHI_LORDS,
        "element": RASHI_ELEMENTS,
        "vashya": RASHI_VASHYA,
    }
    for table_name, table in rashi_tables.items():
        if len(table) != RASHI_COUNT:
            raise ReferenceTableError(
                f"Rashi {table_name} table has {len(table)} entries, expected {RASHI_COUNT}"
            )

    # Each gana and nadi covers exactly nine nakshatras
    for group_table, members in ((NAKSHATRA_GANA, Gana), (NAKSHATRA_NADI, Nadi)):
        for member in members:
            if group_table.count(member) != 9:
                raise ReferenceTableError(f"{member.value} does not cover nine nakshatras")

    yoni_size = len(Yoni)
    if len(YONI_MATRIX) != yoni_size or any(len(row) != yoni_size for row in YONI_MATRIX):
        raise ReferenceTableError("Yoni matrix is not square over all animals")
    for i in range(yoni_size):
        for j in range(yoni_size):
            if YONI_MATRIX[i][j] != YONI_MATRIX[j][i]:
                raise ReferenceTableError(f"Yoni matrix is asymmetric at ({i}, {j})")
            if (YONI_MATRIX[i][j] == YoniRelation.SAME) != (i == j):
                raise ReferenceTableError(f"Yoni SAME relation misplaced at ({i}, {j})")

    vashya_size = len(Vashya)
    if len(VASHYA_MATRIX) != vashya_size or any(len(row) != vashya_size for row in VASHYA_MATRIX):
        raise ReferenceTableError("Vashya matrix is not square over all classes")

    for planet in Planet:
        row = PLANET_RELATIONS.get(planet)
        if row is None:
            raise ReferenceTableError(f"Missing relationship row for {planet.value}")
        if planet in row:
            raise ReferenceTableError(f"{planet.value} must not relate to itself")
        missing = [other.value for other in Planet if other != planet and other not in row]
        if missing:
            raise ReferenceTableError(
                f"Relationship row for {planet.value} missing {', '.join(missing)}"
            )
        if planet not in EXALTATION_SIGNS:
            raise ReferenceTableError(f"Missing exaltation sign for {planet.value}")

    for pair in VEDHA_PAIRS | NADI_EXEMPT_PAIRS:
        if len(pair) != 2 or not all(0 <= n < NAKSHATRA_COUNT for n in pair):
            raise ReferenceTableError(f"Malformed nakshatra pair {sorted(pair)}")

    # An exempted pair must share a nadi, otherwise it could never apply
    for pair in NADI_EXEMPT_PAIRS:
        first, second = sorted(pair)
        if NAKSHATRA_NADI[first] != NAKSHATRA_NADI[second]:
            raise ReferenceTableError(f"Exempted pair {first}/{second} spans two nadis")


verify_tables()
