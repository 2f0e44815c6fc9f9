"""Unit tests for Network editing and adjacency views."""

import pytest

from discrete_lab.network.topology import Connection, Network, Router

# Test constants
DEFAULT_ROUTERS = 6
DEFAULT_CONNECTIONS = 7


class TestNetworkEditing:
    """Test router and connection management."""

    def test_default_network(self):
        """Test the six-router sample."""
        net = Network.default()

        assert len(net.routers) == DEFAULT_ROUTERS
        assert len(net.connections) == DEFAULT_CONNECTIONS
        assert net.get("4").name == "Router D"

    def test_add_router(self):
        """Test that routers get the next numeric id."""
        net = Network.default()
        router = net.add_router("Router G")

        assert router.id == "7"
        assert "7" in net

    def test_add_router_blank_name(self):
        """Test that blank names are refused."""
        with pytest.raises(ValueError, match="must not be empty"):
            Network().add_router("")

    def test_remove_router_drops_connections(self):
        """Test that links touching a removed router disappear."""
        net = Network.default()
        net.remove_router("1")

        assert "1" not in net
        assert all("1" not in (c.source, c.target) for c in net.connections)
        assert len(net.connections) == DEFAULT_CONNECTIONS - 3

    def test_add_connection(self):
        """Test adding a new link."""
        net = Network.default()

        assert net.add_connection("2", "5", 7)
        assert Connection("2", "5", 7) in net.connections

    @pytest.mark.parametrize(
        ("source", "target", "weight"),
        [
            ("1", "1", 1),  # self link
            ("1", "99", 1),  # unknown router
            ("2", "1", 1),  # duplicate in reverse direction
            ("2", "5", -1),  # negative weight
        ],
    )
    def test_rejected_connections(self, source, target, weight):
        """Test that invalid links are refused without changes."""
        net = Network.default()

        assert not net.add_connection(source, target, weight)
        assert len(net.connections) == DEFAULT_CONNECTIONS


class TestAdjacency:
    """Test derived adjacency structures."""

    def test_adjacency_has_both_directions(self):
        """Test that each link is traversable both ways."""
        graph = Network.default().adjacency()

        assert ("2", 2) in graph["1"]
        assert ("1", 2) in graph["2"]

    def test_dangling_connection_skipped(self):
        """Test that links to unknown routers are ignored."""
        net = Network([Router("1", "A")], [Connection("1", "9", 3)])

        assert net.adjacency() == {"1": []}

    def test_adjacency_matrix(self):
        """Test the stored-direction weight matrix."""
        net = Network(
            [Router("1", "A"), Router("2", "B"), Router("3", "C")],
            [Connection("1", "2", 4), Connection("3", "2", 1)],
        )

        assert net.adjacency_matrix() == [
            [0, 4, 0],
            [0, 0, 0],
            [0, 1, 0],
        ]
