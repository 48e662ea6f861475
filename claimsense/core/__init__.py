"""
Core services: the static knowledge and decision history tables.
"""

from .knowledge_store import KnowledgeStore, load_knowledge_store, get_knowledge_store
from .history_store import DecisionHistoryStore, load_history_store, get_history_store

__all__ = [
    "KnowledgeStore",
    "load_knowledge_store",
    "get_knowledge_store",
    "DecisionHistoryStore",
    "load_history_store",
    "get_history_store",
]
