import unittest
import sys
import os
sys.path.append(os.getcwd())

from milan.domain.matching.enums import Guna, GunaTier, Tara, YoniRelation
from milan.domain.matching.errors import ScoringInvariantError
from milan.domain.matching.guna_scorer import GunaScorer, guna_tier, tara_for_distance
from milan.domain.matching.schemas import BirthProfile


def make_profile(moon_sign=0, nakshatra=0, pada=1, **overrides):
    fields = dict(
        moon_sign=moon_sign,
        nakshatra=nakshatra,
        pada=pada,
        mars_house_from_lagna=3,
        mars_house_from_moon=3,
        mars_house_from_venus=3,
    )
    fields.update(overrides)
    return BirthProfile(**fields)


class TestGunaScorer(unittest.TestCase):
    def setUp(self):
        self.scorer = GunaScorer()

    def points(self, guna, bride, groom):
        scores = {s.guna: s for s in self.scorer.score(bride, groom)}
        return scores[guna].raw_points

    def test_returns_eight_scores_in_fixed_order(self):
        scores = self.scorer.score(make_profile(), make_profile(moon_sign=4, nakshatra=10))

        self.assertEqual([s.guna for s in scores], list(Guna))
        self.assertEqual(sum(s.max_points for s in scores), 36)

    def test_raw_and_obtained_match_before_cancellation(self):
        for score in self.scorer.score(make_profile(), make_profile()):
            self.assertEqual(score.raw_points, score.obtained_points)

    # ─── Varna ────────────────────────────

    def test_varna_groom_lower_than_bride(self):
        bride = make_profile(moon_sign=3)   # Cancer, Brahmin
        groom = make_profile(moon_sign=0)   # Aries, Kshatriya
        self.assertEqual(self.points(Guna.VARNA, bride, groom), 0)

    def test_varna_groom_higher_or_equal(self):
        self.assertEqual(self.points(Guna.VARNA, make_profile(moon_sign=0), make_profile(moon_sign=3)), 1)
        self.assertEqual(self.points(Guna.VARNA, make_profile(moon_sign=0), make_profile(moon_sign=4)), 1)

    # ─── Vashya ───────────────────────────

    def test_vashya_same_class(self):
        self.assertEqual(self.points(Guna.VASHYA, make_profile(moon_sign=0), make_profile(moon_sign=1)), 2)

    def test_vashya_is_direction_sensitive(self):
        aries, leo = make_profile(moon_sign=0), make_profile(moon_sign=4)
        # Groom Aries (Chatushpada) over bride Leo (Vanachara)
        self.assertEqual(self.points(Guna.VASHYA, leo, aries), 0.5)
        # Groom Leo over bride Aries
        self.assertEqual(self.points(Guna.VASHYA, aries, leo), 1)

    def test_vashya_hostile(self):
        gemini, leo = make_profile(moon_sign=2), make_profile(moon_sign=4)
        self.assertEqual(self.points(Guna.VASHYA, leo, gemini), 0)

    # ─── Tara ─────────────────────────────

    def test_tara_for_distance(self):
        self.assertEqual(tara_for_distance(0), Tara.PARAMA_MITRA)
        self.assertEqual(tara_for_distance(1), Tara.JANMA)
        self.assertEqual(tara_for_distance(3), Tara.VIPAT)
        self.assertEqual(tara_for_distance(9), Tara.PARAMA_MITRA)
        self.assertEqual(tara_for_distance(10), Tara.JANMA)
        self.assertEqual(tara_for_distance(26), Tara.MITRA)

    def test_tara_both_auspicious(self):
        self.assertEqual(self.points(Guna.TARA, make_profile(nakshatra=4), make_profile(nakshatra=4)), 3)

    def test_tara_one_auspicious(self):
        # Distance 2 (Sampat) one way, 25 (Vadha) the other
        bride, groom = make_profile(nakshatra=0), make_profile(nakshatra=2)
        scores = {s.guna: s for s in self.scorer.score(bride, groom)}

        self.assertEqual(scores[Guna.TARA].raw_points, 1.5)
        self.assertEqual(scores[Guna.TARA].detail, "SAMPAT/VADHA")

    def test_tara_adjacent_nakshatras_start_at_janma(self):
        # Ashwini to Bharani is Janma; Bharani back to Ashwini is Mitra
        bride, groom = make_profile(nakshatra=0), make_profile(nakshatra=1)
        scores = {s.guna: s for s in self.scorer.score(bride, groom)}

        self.assertEqual(scores[Guna.TARA].detail, "JANMA/MITRA")
        self.assertEqual(scores[Guna.TARA].raw_points, 1.5)

    def test_tara_full_marks_only_on_multiples_of_nine(self):
        for distance in range(27):
            with self.subTest(distance=distance):
                expected = 3 if distance % 9 == 0 else 1.5
                points = self.points(Guna.TARA, make_profile(nakshatra=0), make_profile(nakshatra=distance))
                self.assertEqual(points, expected)

    # ─── Yoni ─────────────────────────────

    def test_yoni_same_animal(self):
        self.assertEqual(self.points(Guna.YONI, make_profile(nakshatra=0), make_profile(nakshatra=23)), 4)

    def test_yoni_enemy(self):
        scores = {s.guna: s for s in self.scorer.score(make_profile(nakshatra=0), make_profile(nakshatra=12))}

        self.assertEqual(scores[Guna.YONI].raw_points, 0)
        self.assertEqual(scores[Guna.YONI].detail, YoniRelation.ENEMY.value)
        self.assertEqual(scores[Guna.YONI].bride_value, "HORSE")
        self.assertEqual(scores[Guna.YONI].groom_value, "BUFFALO")

    def test_yoni_neutral(self):
        self.assertEqual(self.points(Guna.YONI, make_profile(nakshatra=0), make_profile(nakshatra=1)), 2)

    # ─── Graha Maitri ─────────────────────

    def test_graha_maitri_tiers(self):
        cases = [
            (0, 7, 5),     # Mars / Mars, same lord
            (0, 4, 5),     # Mars / Sun, mutual friends
            (4, 2, 4),     # Sun / Mercury, neutral + friend
            (0, 1, 3),     # Mars / Venus, both neutral
            (3, 2, 2),     # Moon / Mercury, friend + enemy
            (0, 2, 1),     # Mars / Mercury, enemy + neutral
            (4, 1, 0.5),   # Sun / Venus, mutual enemies
        ]
        for bride_sign, groom_sign, expected in cases:
            with self.subTest(bride=bride_sign, groom=groom_sign):
                self.assertEqual(
                    self.points(Guna.GRAHA_MAITRI, make_profile(moon_sign=bride_sign), make_profile(moon_sign=groom_sign)),
                    expected,
                )

    # ─── Gana ─────────────────────────────

    def test_gana_scores(self):
        cases = [
            (0, 4, 6),   # Deva / Deva
            (0, 1, 5),   # Deva / Manushya
            (1, 2, 2),   # Manushya / Rakshasa
            (0, 2, 0),   # Deva / Rakshasa
        ]
        for bride_nak, groom_nak, expected in cases:
            with self.subTest(bride=bride_nak, groom=groom_nak):
                self.assertEqual(
                    self.points(Guna.GANA, make_profile(nakshatra=bride_nak), make_profile(nakshatra=groom_nak)),
                    expected,
                )

    # ─── Bhakoot ──────────────────────────

    def test_bhakoot_afflicted_distances(self):
        self.assertEqual(self.points(Guna.BHAKOOT, make_profile(moon_sign=0), make_profile(moon_sign=1)), 0)
        self.assertEqual(self.points(Guna.BHAKOOT, make_profile(moon_sign=0), make_profile(moon_sign=5)), 0)
        self.assertEqual(self.points(Guna.BHAKOOT, make_profile(moon_sign=5), make_profile(moon_sign=0)), 0)

    def test_bhakoot_favourable_distances(self):
        self.assertEqual(self.points(Guna.BHAKOOT, make_profile(moon_sign=0), make_profile(moon_sign=4)), 7)
        self.assertEqual(self.points(Guna.BHAKOOT, make_profile(moon_sign=0), make_profile(moon_sign=6)), 7)
        self.assertEqual(self.points(Guna.BHAKOOT, make_profile(moon_sign=0), make_profile(moon_sign=0)), 7)

    # ─── Nadi ─────────────────────────────

    def test_nadi_same_and_different(self):
        self.assertEqual(self.points(Guna.NADI, make_profile(nakshatra=0), make_profile(nakshatra=5)), 0)
        self.assertEqual(self.points(Guna.NADI, make_profile(nakshatra=0), make_profile(nakshatra=1)), 8)

    def test_nadi_raw_is_zero_or_eight(self):
        bride = make_profile(nakshatra=0)
        for nakshatra in range(27):
            self.assertIn(self.points(Guna.NADI, bride, make_profile(nakshatra=nakshatra)), (0, 8))

    # ─── Invariants ───────────────────────

    def test_out_of_range_points_raise(self):
        with self.assertRaises(ScoringInvariantError):
            self.scorer._build(Guna.VARNA, 2.0, "BRAHMIN", "BRAHMIN")
        with self.assertRaises(ScoringInvariantError):
            self.scorer._build(Guna.TARA, 0.25, "Ashwini", "Ashwini")
        with self.assertRaises(ScoringInvariantError):
            self.scorer._build(Guna.NADI, -1.0, "ADI", "ADI")

    def test_guna_tier(self):
        self.assertEqual(guna_tier(8, 8), GunaTier.EXCELLENT)
        self.assertEqual(guna_tier(5, 7), GunaTier.GOOD)
        self.assertEqual(guna_tier(4, 8), GunaTier.AVERAGE)
        self.assertEqual(guna_tier(1, 5), GunaTier.WEAK)
        self.assertEqual(guna_tier(0, 6), GunaTier.INCOMPATIBLE)


if __name__ == "__main__":
    unittest.main()
