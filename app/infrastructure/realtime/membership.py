"""Topic membership lookup used to authorize ``topic:`` channels."""

import threading
from collections import defaultdict
from typing import Dict, Protocol, Set


class TopicMembership(Protocol):
    """Answers whether a principal belongs to a topic."""

    def is_member(self, topic_id: str, user_id: str) -> bool:
        ...


class InMemoryTopicMembership:
    """Thread-safe in-process membership table."""

    def __init__(self):
        self._members: Dict[str, Set[str]] = defaultdict(set)
        self._lock = threading.Lock()

    def add_member(self, topic_id: str, user_id: str) -> None:
        with self._lock:
            self._members[topic_id].add(user_id)

    def remove_member(self, topic_id: str, user_id: str) -> bool:
        """Remove a member. Returns True if they were a member."""
        with self._lock:
            members = self._members.get(topic_id)
            if not members or user_id not in members:
                return False
            members.discard(user_id)
            if not members:
                del self._members[topic_id]
            return True

    def is_member(self, topic_id: str, user_id: str) -> bool:
        with self._lock:
            return user_id in self._members.get(topic_id, ())
