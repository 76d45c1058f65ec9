"""
Tests for load tokens and stale result handling.
"""

from conftest import make_system
from starlanes.models.session import MapData, MapSession


def _data(root_name="Sol"):
    return MapData(systems=[make_system(1, root_name, 2), make_system(2, "B", 1)])


class TestMapSession:
    """Tests for MapSession."""

    def test_tokens_increase(self):
        session = MapSession()
        first = session.begin()
        second = session.begin()
        assert second > first
        assert session.is_current(second)
        assert not session.is_current(first)

    def test_commit_current(self):
        session = MapSession()
        layout = session.commit(session.begin(), _data())
        assert layout is not None
        assert session.layout is layout
        assert layout.root_id == 1

    def test_stale_result_dropped(self):
        session = MapSession()
        old = session.begin()
        new = session.begin()
        assert session.commit(old, _data("Old")) is None
        assert session.layout is None

        layout = session.commit(new, _data("New"))
        assert layout.network.nodes[1].name == "New"

    def test_late_result_does_not_replace_newer_map(self):
        session = MapSession()
        old = session.begin()
        new = session.begin()
        session.commit(new, _data("New"))
        session.commit(old, _data("Old"))
        assert session.layout.network.nodes[1].name == "New"

    def test_capital_used_as_root(self):
        session = MapSession()
        data = _data()
        data.capital_system_id = 2
        layout = session.commit(session.begin(), data)
        assert layout.root_id == 2
        assert (layout.network.nodes[2].x, layout.network.nodes[2].y) == (0.0, 0.0)

    def test_empty_data(self):
        session = MapSession()
        layout = session.commit(session.begin(), MapData(systems=[]))
        assert len(layout.network) == 0
