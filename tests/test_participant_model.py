"""
Unit tests for the Participant, TeamAssignment and Match models.
"""
import unittest

from pelada.models import (
    Participant, PlayerStats, RoleCategory, PlayerRole,
    TeamAssignment, DrawRequest, Match, team_label
)


class TestRoleCategory(unittest.TestCase):
    """Test role category parsing."""

    def test_parse_accepts_value_name_and_member(self) -> None:
        self.assertIs(RoleCategory.parse("Goalkeeper"), RoleCategory.GOALKEEPER)
        self.assertIs(RoleCategory.parse("defender"), RoleCategory.DEFENDER)
        self.assertIs(RoleCategory.parse("FORWARD"), RoleCategory.FORWARD)
        self.assertIs(RoleCategory.parse(RoleCategory.MIDFIELDER), RoleCategory.MIDFIELDER)

    def test_parse_rejects_unknown(self) -> None:
        with self.assertRaises(ValueError):
            RoleCategory.parse("Libero")


class TestParticipant(unittest.TestCase):
    """Test Participant behaviour and serialization."""

    def setUp(self) -> None:
        self.keeper = Participant(id="1", name="Ana", position=RoleCategory.GOALKEEPER, rating=88)
        self.defender = Participant(id="2", name="Bea", position=RoleCategory.DEFENDER)

    def test_defaults(self) -> None:
        player = Participant(id="x", name="Novo")
        self.assertIs(player.position, RoleCategory.MIDFIELDER)
        self.assertEqual(player.rating, 60)
        self.assertFalse(player.confirmed)
        self.assertFalse(player.paid)
        self.assertIs(player.role, PlayerRole.PLAYER)
        self.assertEqual(player.statistics, PlayerStats())

    def test_is_keeper(self) -> None:
        self.assertTrue(self.keeper.is_keeper())
        self.assertFalse(self.defender.is_keeper())

    def test_star_rating(self) -> None:
        self.assertEqual(self.keeper.star_rating(), 4)
        self.assertEqual(self.defender.star_rating(), 3)
        self.assertEqual(Participant(id="3", name="Cid", rating=100).star_rating(), 5)
        self.assertEqual(Participant(id="4", name="Duda", rating=0).star_rating(), 0)

    def test_dict_round_trip(self) -> None:
        player = Participant(
            id="7", name="Caio", position=RoleCategory.FORWARD, confirmed=True,
            paid=True, rating=84, avatar="http://img/7", role=PlayerRole.ADMIN,
            statistics=PlayerStats(goals=12, assists=3, matches=20),
            club="Hajduk Split", number=4
        )
        data = player.to_dict()
        self.assertEqual(data["position"], "Forward")
        self.assertEqual(data["role"], "admin")
        self.assertEqual(Participant.from_dict(data), player)

    def test_from_dict_tolerates_missing_optional_fields(self) -> None:
        player = Participant.from_dict({"id": 5, "name": "Edu"})
        self.assertEqual(player.id, "5")
        self.assertIs(player.position, RoleCategory.MIDFIELDER)
        self.assertIsNone(player.number)
        self.assertEqual(player.statistics.goals, 0)

    def test_from_dict_requires_name(self) -> None:
        with self.assertRaises(KeyError):
            Participant.from_dict({"id": "1"})


class TestTeamAssignment(unittest.TestCase):
    """Test team helpers."""

    def test_team_label_sequence(self) -> None:
        self.assertEqual([team_label(i) for i in range(3)], ["Team A", "Team B", "Team C"])
        self.assertEqual(team_label(25), "Team Z")
        self.assertEqual(team_label(26), "Team AA")
        self.assertEqual(team_label(27), "Team AB")

    def test_team_label_rejects_negative(self) -> None:
        with self.assertRaises(ValueError):
            team_label(-1)

    def test_counts_and_average(self) -> None:
        team = TeamAssignment(name="Team A", members=[
            Participant(id="1", name="Ana", position=RoleCategory.GOALKEEPER, rating=90),
            Participant(id="2", name="Bea", position=RoleCategory.DEFENDER, rating=70),
        ])
        self.assertEqual(team.keeper_count(), 1)
        self.assertEqual(team.field_count(), 1)
        self.assertEqual(team.average_stars(), 4.0)
        self.assertEqual(team.member_ids(), ["1", "2"])
        self.assertEqual(team.to_dict()["average"], 4.0)

    def test_empty_team_average(self) -> None:
        self.assertEqual(TeamAssignment(name="Team A").average_stars(), 0.0)

    def test_draw_request_count(self) -> None:
        request = DrawRequest(number_of_teams=2, eligible_participants=[
            Participant(id="1", name="Ana"), Participant(id="2", name="Bea")
        ])
        self.assertEqual(request.eligible_count, 2)


class TestMatch(unittest.TestCase):
    """Test match model."""

    def test_capacity(self) -> None:
        match = Match(id="m", location="Arena", date="21/10", time="20:00", limit=14)
        self.assertTrue(match.has_capacity_for(13))
        self.assertFalse(match.has_capacity_for(14))
        unlimited = Match(id="n", location="Arena", date="21/10", time="20:00")
        self.assertTrue(unlimited.has_capacity_for(500))

    def test_dict_round_trip(self) -> None:
        match = Match(id="m", location="Arena", date="21/10", time="20:00",
                      match_type="Futsal", price=300.0, limit=18, created_at=10.0)
        data = match.to_dict()
        self.assertEqual(data["type"], "Futsal")
        self.assertEqual(Match.from_dict(data), match)


if __name__ == "__main__":
    unittest.main()
