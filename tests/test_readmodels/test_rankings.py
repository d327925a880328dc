"""
Tests for ranking readmodels
"""
from app.readmodels.rankings import (
    get_level_ranking,
    get_score_ranking,
    get_top_rankings,
    get_user_ranking,
)


def _seed_users(make_user):
    make_user("a", display_name="A", score=30, level=3, experience=450)
    make_user("b", display_name="B", score=50, level=2, experience=300)
    make_user("c", display_name="C", score=30, level=3, experience=500)
    make_user("banned", display_name="X", score=999, level=40, experience=99999, status="banned")


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------

def test_score_ranking_excludes_inactive(db_session, make_user):
    _seed_users(make_user)
    ids = [row["id"] for row in get_score_ranking(db_session)]
    # ties on score broken by experience
    assert ids == ["b", "c", "a"]


def test_level_ranking_order(db_session, make_user):
    _seed_users(make_user)
    ids = [row["id"] for row in get_level_ranking(db_session)]
    assert ids == ["c", "a", "b"]


def test_ranking_limit(db_session, make_user):
    _seed_users(make_user)
    assert len(get_score_ranking(db_session, limit=2)) == 2


def test_top_rankings_shape(db_session, make_user):
    make_user("a", display_name="A", score=5)
    assert get_top_rankings(db_session) == [{"name": "A", "score": 5}]


def test_user_ranking_positions(db_session, make_user):
    _seed_users(make_user)

    ranking = get_user_ranking(db_session, "a")

    assert ranking["scoreRank"] == 2   # only b is strictly ahead
    assert ranking["levelRank"] == 2   # only c is ahead (same level, more exp)
    assert ranking["points"] == 0


def test_user_ranking_missing(db_session):
    assert get_user_ranking(db_session, "nobody") is None
