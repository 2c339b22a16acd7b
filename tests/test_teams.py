from nhlbot.teams import TeamDirectory, load_teams


def test_table_has_every_club() -> None:
    teams = load_teams()
    assert len(teams) == 32
    assert all(abbr == record.abbreviation for abbr, record in teams.items())


def test_resolve_aliases(teams) -> None:
    assert teams.resolve_team("pens") == "PIT"
    assert teams.resolve_team("Pittsburgh") == "PIT"
    assert teams.resolve_team("  kraken ") == "SEA"
    assert teams.resolve_team("caps") == "WSH"
    assert teams.resolve_team("san jose") == "SJS"


def test_abbreviation_wins_case_insensitively(teams) -> None:
    assert teams.resolve_team("wsh") == "WSH"
    assert teams.resolve_team("Tor") == "TOR"


def test_unknown_input_resolves_to_none(teams) -> None:
    assert teams.resolve_team("xyz") is None
    assert teams.resolve_team("") is None
    assert teams.resolve_team(None) is None
    # No partial matching
    assert teams.resolve_team("pitts") is None


def test_names_and_lookups(teams) -> None:
    assert teams.team_name("PIT") == "Pittsburgh Penguins"
    assert teams.team_name("XYZ") is None
    assert teams.display_name("XYZ") == "XYZ"
    assert teams.get("PIT").short_name == "penguins"
    assert teams.short_name("TOR") == "leafs"
    assert teams.short_name("XYZ") == "xyz"
    assert "Penguins" in teams.search_keywords("PIT")
    assert teams.rss_slug("PIT") == "pittsburgh-penguins"
    assert teams.is_nhl_team("SEA")
    assert not teams.is_nhl_team("AHL")
    assert "PIT" in teams
    assert len(TeamDirectory()) == 32
