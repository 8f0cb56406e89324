import unittest
import sys
import os
sys.path.append(os.getcwd())

from milan.domain.matching.cancellation import (
    BHAKOOT_CHAIN,
    NADI_CHAIN,
    CancellationEngine,
    first_match,
    levels_compatible,
)
from milan.domain.matching.dosha_detector import DoshaDetector
from milan.domain.matching.enums import (
    CancellationRule,
    CancellationVerdict,
    ManglikBalance,
    ManglikLevel,
    Party,
)
from milan.domain.matching.schemas import BirthProfile


def make_profile(moon_sign=0, nakshatra=0, pada=1, lagna=3, moon=3, venus=3, **overrides):
    return BirthProfile(
        moon_sign=moon_sign,
        nakshatra=nakshatra,
        pada=pada,
        mars_house_from_lagna=lagna,
        mars_house_from_moon=moon,
        mars_house_from_venus=venus,
        **overrides,
    )


NONE_HOUSES = dict(lagna=3, moon=3, venus=3)
PARTIAL_HOUSES = dict(lagna=1, moon=3, venus=3)
FULL_HOUSES = dict(lagna=1, moon=7, venus=3)
DOUBLE_HOUSES = dict(lagna=1, moon=7, venus=8)


class TestNadiChain(unittest.TestCase):
    def assertRule(self, bride, groom, rule, verdict):
        matched = first_match(NADI_CHAIN, bride, groom)
        self.assertIsNotNone(matched)
        self.assertEqual(matched.rule, rule)
        self.assertEqual(matched.verdict, verdict)

    def test_same_nakshatra_different_rashi(self):
        # Krittika spans Aries and Taurus
        self.assertRule(
            make_profile(moon_sign=0, nakshatra=2),
            make_profile(moon_sign=1, nakshatra=2),
            CancellationRule.NADI_CANCEL_SAME_NAK_DIFF_RASHI,
            CancellationVerdict.FULLY_CANCELLED,
        )

    def test_same_rashi_outranks_special_pair(self):
        # Krittika / Rohini in Taurus is also an exempted pair
        self.assertRule(
            make_profile(moon_sign=1, nakshatra=2),
            make_profile(moon_sign=1, nakshatra=3),
            CancellationRule.NADI_CANCEL_SAME_RASHI_DIFF_NAK,
            CancellationVerdict.FULLY_CANCELLED,
        )

    def test_different_pada(self):
        self.assertRule(
            make_profile(moon_sign=0, nakshatra=0, pada=1),
            make_profile(moon_sign=0, nakshatra=0, pada=3),
            CancellationRule.NADI_CANCEL_DIFF_PADA,
            CancellationVerdict.PARTIALLY_CANCELLED,
        )

    def test_special_pair(self):
        # Rohini (Taurus) / Magha (Leo)
        self.assertRule(
            make_profile(moon_sign=1, nakshatra=3),
            make_profile(moon_sign=4, nakshatra=9),
            CancellationRule.NADI_CANCEL_SPECIAL_PAIR,
            CancellationVerdict.PARTIALLY_CANCELLED,
        )

    def test_nakshatra_lords_mutual_friends(self):
        # Punarvasu (Jupiter) / Uttara Phalguni (Sun), both Adi
        self.assertRule(
            make_profile(moon_sign=2, nakshatra=6),
            make_profile(moon_sign=5, nakshatra=11),
            CancellationRule.NADI_CANCEL_LORDS_FRIENDS,
            CancellationVerdict.PARTIALLY_CANCELLED,
        )

    def test_same_nakshatra_lord(self):
        # Ashwini and Mula are both ruled by Ketu
        self.assertRule(
            make_profile(moon_sign=0, nakshatra=0),
            make_profile(moon_sign=8, nakshatra=18),
            CancellationRule.NADI_CANCEL_SAME_NAK_LORD,
            CancellationVerdict.PARTIALLY_CANCELLED,
        )

    def test_identical_profiles_are_not_cancelled(self):
        self.assertIsNone(first_match(NADI_CHAIN, make_profile(), make_profile()))

    def test_unrelated_same_nadi_is_not_cancelled(self):
        # Ashwini (Ketu) / Hasta (Moon)
        self.assertIsNone(
            first_match(NADI_CHAIN, make_profile(moon_sign=0, nakshatra=0), make_profile(moon_sign=5, nakshatra=12))
        )


class TestBhakootChain(unittest.TestCase):
    def assertRule(self, bride, groom, rule, verdict):
        matched = first_match(BHAKOOT_CHAIN, bride, groom)
        self.assertIsNotNone(matched)
        self.assertEqual(matched.rule, rule)
        self.assertEqual(matched.verdict, verdict)

    def test_same_lord(self):
        # Aries / Scorpio, both Mars, 6/8 apart
        self.assertRule(
            make_profile(moon_sign=0),
            make_profile(moon_sign=7),
            CancellationRule.BHAKOOT_CANCEL_SAME_LORD,
            CancellationVerdict.FULLY_CANCELLED,
        )

    def test_mutual_friends(self):
        # Aries (Mars) / Pisces (Jupiter), 2/12 apart
        self.assertRule(
            make_profile(moon_sign=0),
            make_profile(moon_sign=11),
            CancellationRule.BHAKOOT_CANCEL_MUTUAL_FRIENDS,
            CancellationVerdict.FULLY_CANCELLED,
        )

    def test_exaltation_outranks_friendly(self):
        # Jupiter, lord of Sagittarius, is exalted in Cancer
        self.assertRule(
            make_profile(moon_sign=3),
            make_profile(moon_sign=8),
            CancellationRule.BHAKOOT_CANCEL_EXALTATION,
            CancellationVerdict.PARTIALLY_CANCELLED,
        )

    def test_one_directional_friendship(self):
        # Leo (Sun) / Virgo (Mercury): Sun neutral, Mercury friendly
        self.assertRule(
            make_profile(moon_sign=4),
            make_profile(moon_sign=5),
            CancellationRule.BHAKOOT_CANCEL_FRIENDLY,
            CancellationVerdict.PARTIALLY_CANCELLED,
        )

    def test_same_element_in_isolation(self):
        element_rule = BHAKOOT_CHAIN[-1:]
        matched = first_match(element_rule, make_profile(moon_sign=0), make_profile(moon_sign=4))

        self.assertEqual(matched.rule, CancellationRule.BHAKOOT_CANCEL_ELEMENT)
        self.assertIsNone(first_match(element_rule, make_profile(moon_sign=0), make_profile(moon_sign=1)))

    def test_shadashtak_without_relief(self):
        # Aries (Mars) / Virgo (Mercury)
        self.assertIsNone(first_match(BHAKOOT_CHAIN, make_profile(moon_sign=0), make_profile(moon_sign=5)))

    def test_chain_order_is_fixed(self):
        self.assertEqual(
            [spec.rule for spec in BHAKOOT_CHAIN],
            [
                CancellationRule.BHAKOOT_CANCEL_SAME_LORD,
                CancellationRule.BHAKOOT_CANCEL_MUTUAL_FRIENDS,
                CancellationRule.BHAKOOT_CANCEL_EXALTATION,
                CancellationRule.BHAKOOT_CANCEL_FRIENDLY,
                CancellationRule.BHAKOOT_CANCEL_ELEMENT,
            ],
        )


class TestCancellationEngine(unittest.TestCase):
    def setUp(self):
        self.detector = DoshaDetector()
        self.engine = CancellationEngine()

    def apply(self, bride, groom):
        return self.engine.apply(bride, groom, self.detector.detect(bride, groom))

    def test_records_first_matching_nadi_rule(self):
        result = self.apply(make_profile(moon_sign=1, nakshatra=2), make_profile(moon_sign=1, nakshatra=3))

        self.assertEqual(result.doshas.nadi.verdict, CancellationVerdict.FULLY_CANCELLED)
        self.assertEqual(
            result.doshas.nadi.cancellation_rules,
            (CancellationRule.NADI_CANCEL_SAME_RASHI_DIFF_NAK,),
        )

    def test_uncancelled_nadi(self):
        result = self.apply(make_profile(), make_profile())

        self.assertEqual(result.doshas.nadi.verdict, CancellationVerdict.NOT_CANCELLED)
        self.assertEqual(result.doshas.nadi.cancellation_rules, ())

    def test_absent_doshas_stay_not_applicable(self):
        result = self.apply(make_profile(moon_sign=0, nakshatra=0), make_profile(moon_sign=4, nakshatra=1))

        self.assertEqual(result.doshas.nadi.verdict, CancellationVerdict.NOT_APPLICABLE)
        self.assertEqual(result.doshas.bhakoot.verdict, CancellationVerdict.NOT_APPLICABLE)
        self.assertEqual(result.doshas.vedha.verdict, CancellationVerdict.NOT_APPLICABLE)
        self.assertEqual(result.doshas.rajju.verdict, CancellationVerdict.NOT_APPLICABLE)

    def test_rule_selection_is_deterministic(self):
        bride, groom = make_profile(moon_sign=3), make_profile(moon_sign=8)
        first = self.apply(bride, groom)
        for _ in range(5):
            self.assertEqual(self.apply(bride, groom), first)

    # ─── Manglik ──────────────────────────

    def test_levels_compatible(self):
        self.assertTrue(levels_compatible(ManglikLevel.FULL, ManglikLevel.FULL))
        self.assertTrue(levels_compatible(ManglikLevel.PARTIAL, ManglikLevel.FULL))
        self.assertFalse(levels_compatible(ManglikLevel.PARTIAL, ManglikLevel.DOUBLE))

    def test_both_full_manglik_cancel_mutually(self):
        result = self.apply(make_profile(**FULL_HOUSES), make_profile(**FULL_HOUSES))

        for finding in (result.doshas.bride_manglik, result.doshas.groom_manglik):
            self.assertEqual(finding.verdict, CancellationVerdict.FULLY_CANCELLED)
            self.assertIn(CancellationRule.MANGLIK_CANCEL_MUTUAL, finding.cancellation_rules)
        self.assertEqual(result.manglik.balance, ManglikBalance.MUTUAL)
        self.assertFalse(result.manglik.severe)

    def test_bride_only_manglik(self):
        result = self.apply(make_profile(**FULL_HOUSES), make_profile(**NONE_HOUSES))

        self.assertEqual(result.doshas.bride_manglik.verdict, CancellationVerdict.NOT_CANCELLED)
        self.assertEqual(result.doshas.groom_manglik.verdict, CancellationVerdict.NOT_APPLICABLE)
        self.assertEqual(result.manglik.balance, ManglikBalance.BRIDE_ONLY)
        self.assertEqual(result.manglik.imbalanced_party, Party.BRIDE)
        self.assertTrue(result.manglik.severe)

    def test_groom_only_manglik(self):
        result = self.apply(make_profile(**NONE_HOUSES), make_profile(**DOUBLE_HOUSES))

        self.assertEqual(result.manglik.balance, ManglikBalance.GROOM_ONLY)
        self.assertEqual(result.manglik.imbalanced_party, Party.GROOM)
        self.assertTrue(result.manglik.severe)

    def test_partial_manglik_is_minor(self):
        result = self.apply(make_profile(**PARTIAL_HOUSES), make_profile(**NONE_HOUSES))

        self.assertEqual(result.manglik.balance, ManglikBalance.MINOR_IMBALANCE)
        self.assertEqual(result.manglik.imbalanced_party, Party.BRIDE)
        self.assertFalse(result.manglik.severe)

    def test_levels_too_far_apart(self):
        result = self.apply(make_profile(**PARTIAL_HOUSES), make_profile(**DOUBLE_HOUSES))

        self.assertEqual(result.manglik.balance, ManglikBalance.SIGNIFICANT_IMBALANCE)
        self.assertEqual(result.manglik.imbalanced_party, Party.GROOM)
        self.assertTrue(result.manglik.severe)

    def test_age_cancels_above_threshold_only(self):
        over = self.apply(make_profile(age=29, **FULL_HOUSES), make_profile())
        at = self.apply(make_profile(age=28, **FULL_HOUSES), make_profile())

        self.assertEqual(over.doshas.bride_manglik.verdict, CancellationVerdict.FULLY_CANCELLED)
        self.assertEqual(over.doshas.bride_manglik.cancellation_rules, (CancellationRule.MANGLIK_CANCEL_AGE,))
        self.assertEqual(over.manglik.balance, ManglikBalance.NONE)
        self.assertEqual(at.doshas.bride_manglik.verdict, CancellationVerdict.NOT_CANCELLED)

    def test_all_matching_manglik_rules_are_recorded(self):
        bride = make_profile(
            age=35,
            mars_in_own_or_exalted_sign=True,
            mars_aspected_by_benefic=True,
            **FULL_HOUSES,
        )
        result = self.apply(bride, make_profile())

        self.assertEqual(
            result.doshas.bride_manglik.cancellation_rules,
            (
                CancellationRule.MANGLIK_CANCEL_OWN_OR_EXALTED,
                CancellationRule.MANGLIK_CANCEL_AGE,
                CancellationRule.MANGLIK_CANCEL_BENEFIC_ASPECT,
            ),
        )

    def test_one_party_cancelled_leaves_other_imbalanced(self):
        bride = make_profile(age=30, **DOUBLE_HOUSES)
        groom = make_profile(**PARTIAL_HOUSES)
        result = self.apply(bride, groom)

        self.assertEqual(result.doshas.bride_manglik.verdict, CancellationVerdict.FULLY_CANCELLED)
        self.assertEqual(result.doshas.groom_manglik.verdict, CancellationVerdict.NOT_CANCELLED)
        self.assertEqual(result.manglik.balance, ManglikBalance.MINOR_IMBALANCE)
        self.assertEqual(result.manglik.imbalanced_party, Party.GROOM)

    def test_non_manglik_is_not_applicable(self):
        result = self.apply(make_profile(), make_profile())

        self.assertEqual(result.doshas.bride_manglik.verdict, CancellationVerdict.NOT_APPLICABLE)
        self.assertEqual(result.manglik.balance, ManglikBalance.NONE)


if __name__ == "__main__":
    unittest.main()
