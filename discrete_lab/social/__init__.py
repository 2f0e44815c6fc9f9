"""Friendship graphs, reachability and friend-of-friend recommendations."""

from discrete_lab.social.closure import friend_recommendations, reachable_from, transitive_closure
from discrete_lab.social.friendships import Person, SocialGraph

__all__ = [
    "Person",
    "SocialGraph",
    "friend_recommendations",
    "reachable_from",
    "transitive_closure",
]
