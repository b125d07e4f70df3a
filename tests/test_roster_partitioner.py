"""
Unit tests for the team draw.

Team sizes and keeper spread are deterministic and checked on unseeded runs;
exact placement is checked with a seeded or no-op random source.
"""
import random
import unittest
from collections import Counter
from typing import List
from unittest.mock import patch

from pelada.models import Participant, RoleCategory, TeamAssignment
from pelada.services.roster_partitioner import (
    InsufficientPlayersError, InvalidInputError, DrawError,
    suggest_team_count, draw, format_shareable_text, clamp_team_count,
    _serpentine_slot
)

FIELD_ROLES = [RoleCategory.DEFENDER, RoleCategory.MIDFIELDER, RoleCategory.FORWARD]


class NoShuffle:
    """Random source that leaves pools in their original order."""

    def shuffle(self, x: list) -> None:
        pass


def make_roster(keepers: int, field_players: int) -> List[Participant]:
    roster = [
        Participant(id=f"gk{i}", name=f"Keeper {i}", position=RoleCategory.GOALKEEPER, confirmed=True)
        for i in range(1, keepers + 1)
    ]
    roster += [
        Participant(id=f"f{i}", name=f"Field {i}", position=FIELD_ROLES[i % 3], confirmed=True)
        for i in range(1, field_players + 1)
    ]
    return roster


def all_ids(teams: List[TeamAssignment]) -> List[str]:
    return [p.id for team in teams for p in team.members]


class TestSuggestTeamCount(unittest.TestCase):
    """Test the suggested team count."""

    def test_reference_values(self) -> None:
        self.assertEqual(suggest_team_count(0), 2)
        self.assertEqual(suggest_team_count(13), 2)
        self.assertEqual(suggest_team_count(14), 2)
        self.assertEqual(suggest_team_count(21), 3)
        self.assertEqual(suggest_team_count(28), 4)

    def test_large_roster_is_not_clamped(self) -> None:
        self.assertEqual(suggest_team_count(70), 10)
        self.assertEqual(clamp_team_count(suggest_team_count(70)), 6)


class TestDraw(unittest.TestCase):
    """Test draw invariants and scenarios."""

    def test_team_names_in_order(self) -> None:
        teams = draw(make_roster(3, 15), 3)
        self.assertEqual([t.name for t in teams], ["Team A", "Team B", "Team C"])

    def test_four_keepers_twenty_field_two_teams(self) -> None:
        teams = draw(make_roster(4, 20), 2)
        self.assertEqual(len(teams), 2)
        for team in teams:
            self.assertEqual(team.keeper_count(), 2)
            self.assertEqual(team.field_count(), 10)

    def test_ten_players_two_teams_rejected(self) -> None:
        with self.assertRaises(InsufficientPlayersError) as ctx:
            draw(make_roster(2, 8), 2)
        self.assertEqual(ctx.exception.number_of_teams, 2)
        self.assertEqual(ctx.exception.eligible_count, 10)
        self.assertEqual(ctx.exception.required, 12)
        self.assertIn("2 teams", str(ctx.exception))

    def test_exact_minimum_succeeds(self) -> None:
        teams = draw(make_roster(0, 18), 3)
        self.assertEqual(sorted(len(t.members) for t in teams), [6, 6, 6])

    def test_empty_roster_rejected(self) -> None:
        with self.assertRaises(InsufficientPlayersError):
            draw([], 2)

    def test_every_player_assigned_once(self) -> None:
        for keepers, field_players, teams_requested in [(0, 12, 2), (3, 20, 3), (5, 26, 4), (7, 31, 6)]:
            roster = make_roster(keepers, field_players)
            teams = draw(roster, teams_requested)
            ids = all_ids(teams)
            self.assertEqual(len(ids), len(roster))
            self.assertEqual(Counter(ids), Counter(p.id for p in roster))

    def test_pools_balanced_within_one(self) -> None:
        for _ in range(20):
            teams = draw(make_roster(5, 22), 4)
            keeper_counts = [t.keeper_count() for t in teams]
            field_counts = [t.field_count() for t in teams]
            self.assertLessEqual(max(keeper_counts) - min(keeper_counts), 1)
            self.assertLessEqual(max(field_counts) - min(field_counts), 1)

    def test_keepers_placed_before_field_players(self) -> None:
        teams = draw(make_roster(5, 20), 3)
        for team in teams:
            flags = [p.is_keeper() for p in team.members]
            self.assertEqual(flags, sorted(flags, reverse=True))

    def test_independent_pools_can_skew_total_size(self) -> None:
        # 3 keepers and 13 field players over 2 teams: Team A takes the extra of both
        teams = draw(make_roster(3, 13), 2, rng=NoShuffle())
        self.assertEqual([len(t.members) for t in teams], [9, 7])

    def test_round_robin_order_without_shuffle(self) -> None:
        roster = make_roster(3, 0) + [
            Participant(id=f"{role.value[0]}{i}", name=f"{role.value} {i}", position=role)
            for role in [RoleCategory.FORWARD, RoleCategory.MIDFIELDER, RoleCategory.DEFENDER]
            for i in range(1, 5)
        ]
        teams = draw(roster, 2, rng=NoShuffle())
        self.assertEqual(teams[0].member_ids(), ["gk1", "gk3", "D1", "D3", "M1", "M3", "F1", "F3"])
        self.assertEqual(teams[1].member_ids(), ["gk2", "D2", "D4", "M2", "M4", "F2", "F4"])

    def test_seeded_source_is_reproducible(self) -> None:
        roster = make_roster(4, 20)
        first = draw(roster, 3, rng=random.Random(42))
        second = draw(roster, 3, rng=random.Random(42))
        self.assertEqual([t.member_ids() for t in first], [t.member_ids() for t in second])

    def test_default_source_is_random_module(self) -> None:
        with patch("pelada.services.roster_partitioner.random") as mock_random:
            teams = draw(make_roster(4, 8), 2)
        self.assertEqual(mock_random.shuffle.call_count, 2)
        self.assertEqual(teams[0].member_ids()[:2], ["gk1", "gk3"])

    def test_input_not_mutated(self) -> None:
        roster = make_roster(4, 20)
        before = [p.id for p in roster]
        draw(roster, 2)
        self.assertEqual([p.id for p in roster], before)

    def test_team_count_clamped(self) -> None:
        self.assertEqual(len(draw(make_roster(2, 10), 1)), 2)
        self.assertEqual(len(draw(make_roster(6, 36), 9)), 6)

    def test_clamped_count_used_for_capacity_check(self) -> None:
        with self.assertRaises(InsufficientPlayersError) as ctx:
            draw(make_roster(6, 24), 8)
        self.assertEqual(ctx.exception.number_of_teams, 6)

    def test_invalid_team_counts(self) -> None:
        roster = make_roster(2, 20)
        for bad in (0, -3, "2", 2.0, True, None):
            with self.assertRaises(InvalidInputError):
                draw(roster, bad)

    def test_duplicate_ids_rejected(self) -> None:
        roster = make_roster(2, 12)
        roster.append(Participant(id="f1", name="Impostor", position=RoleCategory.FORWARD))
        with self.assertRaises(InvalidInputError) as ctx:
            draw(roster, 2)
        self.assertIn("f1", str(ctx.exception))

    def test_errors_share_base_class(self) -> None:
        self.assertTrue(issubclass(InsufficientPlayersError, DrawError))
        self.assertTrue(issubclass(InvalidInputError, DrawError))


class TestBalanceLevels(unittest.TestCase):
    """Test rating-balanced serpentine dealing."""

    def test_serpentine_slots(self) -> None:
        self.assertEqual([_serpentine_slot(i, 3) for i in range(9)], [0, 1, 2, 2, 1, 0, 0, 1, 2])

    def test_strongest_players_spread(self) -> None:
        keepers = [
            Participant(id="gk-low", name="Low", position=RoleCategory.GOALKEEPER, rating=50),
            Participant(id="gk-high", name="High", position=RoleCategory.GOALKEEPER, rating=90),
        ]
        field_players = [
            Participant(id=f"p{i}", name=f"P{i}", position=RoleCategory.MIDFIELDER, rating=100 - i * 5)
            for i in range(12)
        ]
        teams = draw(keepers + field_players, 2, rng=NoShuffle(), balance_levels=True)
        self.assertEqual(teams[0].member_ids(), ["gk-high", "p0", "p3", "p4", "p7", "p8", "p11"])
        self.assertEqual(teams[1].member_ids(), ["gk-low", "p1", "p2", "p5", "p6", "p9", "p10"])

    def test_balanced_draw_keeps_invariants(self) -> None:
        roster = make_roster(5, 25)
        for i, player in enumerate(roster):
            player.rating = 40 + (i * 7) % 60
        teams = draw(roster, 4, balance_levels=True)
        self.assertEqual(Counter(all_ids(teams)), Counter(p.id for p in roster))
        keeper_counts = [t.keeper_count() for t in teams]
        field_counts = [t.field_count() for t in teams]
        self.assertLessEqual(max(keeper_counts) - min(keeper_counts), 1)
        self.assertLessEqual(max(field_counts) - min(field_counts), 1)


class TestFormatShareableText(unittest.TestCase):
    """Test the shareable listing."""

    def test_single_team_listing(self) -> None:
        team = TeamAssignment(name="Team A", members=[
            Participant(id="1", name="Ana", position=RoleCategory.GOALKEEPER),
            Participant(id="2", name="Bea", position=RoleCategory.DEFENDER),
        ])
        text = format_shareable_text([team])
        lines = text.splitlines()
        self.assertEqual(lines[0], "TEAM A")
        self.assertIn("- Ana (GK)", lines)
        self.assertIn("- Bea (FIELD)", lines)
        self.assertLess(lines.index("- Ana (GK)"), lines.index("- Bea (FIELD)"))
        self.assertEqual(lines[-1], "Drawn with Pelada Manager")

    def test_every_field_role_uses_generic_tag(self) -> None:
        team = TeamAssignment(name="Team B", members=[
            Participant(id=str(i), name=role.value, position=role)
            for i, role in enumerate(FIELD_ROLES)
        ])
        text = format_shareable_text([team])
        self.assertEqual(text.count("(FIELD)"), 3)
        self.assertNotIn("(GK)", text)

    def test_teams_listed_in_order(self) -> None:
        teams = draw(make_roster(2, 10), 2, rng=random.Random(1))
        text = format_shareable_text(teams)
        self.assertLess(text.index("TEAM A"), text.index("TEAM B"))
        for player in make_roster(2, 10):
            self.assertIn(f"- {player.name} (", text)


if __name__ == "__main__":
    unittest.main()
