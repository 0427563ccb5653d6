"""
ReliefLink Triage Pipeline — LangGraph StateGraph

Each message flows through:
  1. extract           (Gemini, or the fixed fallback)
  2. score_urgency  ┐  independent branches, run in the same step
     resolve_location┘
  3. match_resource    (nearest Available resource of the needed type)

analyze_batch() runs the graph once per non-blank message, records every result
in storage, and returns the batch sorted by urgency_score (highest first).
"""
import logging
import uuid
from typing import Iterable, List, Optional
from typing_extensions import TypedDict

from langgraph.graph import StateGraph, END

from relieflink.core.matching import match_resource
from relieflink.core.severity import score_urgency
from relieflink.db.storage import Storage
from relieflink.schemas.triage import AnalyzedMessage, Coordinates, ExtractionResult, Resource
from relieflink.services.extraction import Extractor
from relieflink.services.maps import LocationResolver

logger = logging.getLogger(__name__)


# ─── State Schema ───────────────────────────────────────────────
class TriageState(TypedDict):
    """State for one message. Nodes return only the keys they own."""
    # Input
    message: str
    resources: List[Resource]

    # Filled in by the nodes
    extraction: Optional[ExtractionResult]
    urgency_score: Optional[int]
    coordinates: Optional[Coordinates]
    matched_resource: Optional[Resource]


def split_message_lines(text: str) -> List[str]:
    """One message per non-blank line."""
    return [line for line in (text or "").splitlines() if line.strip()]


class TriagePipeline:
    def __init__(self, extractor: Extractor, resolver: LocationResolver, storage: Storage):
        self.extractor = extractor
        self.resolver = resolver
        self.storage = storage
        self.graph = self._build_graph()

    # ─── Node Functions ──────────────────────────────────────────

    def _extract(self, state: TriageState) -> dict:
        return {"extraction": self.extractor.extract(state["message"])}

    def _score(self, state: TriageState) -> dict:
        # Keyword bonuses look at the original text, not the extraction.
        level = state["extraction"].urgency_level
        return {"urgency_score": score_urgency(level, state["message"])}

    def _locate(self, state: TriageState) -> dict:
        return {"coordinates": self.resolver.resolve(state["extraction"].location)}

    def _match(self, state: TriageState) -> dict:
        match = match_resource(state["extraction"].need, state["coordinates"], state["resources"])
        return {"matched_resource": match}

    # ─── Build the Graph ─────────────────────────────────────────

    def _build_graph(self):
        """
        Flow:
        START → extract → (score_urgency, resolve_location) → match_resource → END
        """
        graph = StateGraph(TriageState)

        graph.add_node("extract", self._extract)
        graph.add_node("score_urgency", self._score)
        graph.add_node("resolve_location", self._locate)
        graph.add_node("match_resource", self._match)

        graph.set_entry_point("extract")
        graph.add_edge("extract", "score_urgency")
        graph.add_edge("extract", "resolve_location")
        graph.add_edge(["score_urgency", "resolve_location"], "match_resource")
        graph.add_edge("match_resource", END)

        return graph.compile()

    # ─── Entry Points ────────────────────────────────────────────

    def analyze_message(self, message: str, resources: List[Resource]) -> AnalyzedMessage:
        """Run one message through the graph and record the result."""
        initial_state: TriageState = {
            "message": message,
            "resources": resources,
            "extraction": None,
            "urgency_score": None,
            "coordinates": None,
            "matched_resource": None,
        }
        state = self.graph.invoke(initial_state)

        match = state["matched_resource"]
        result = AnalyzedMessage(
            **state["extraction"].model_dump(),
            id=str(uuid.uuid4()),
            original_content=message,
            urgency_score=state["urgency_score"],
            coordinates=state["coordinates"],
            matched_resource_id=match.id if match else None,
            matched_resource=match,
        )
        self.storage.record_result(result)
        return result

    def analyze_batch(self, messages: Iterable[str]) -> List[AnalyzedMessage]:
        """
        Analyze every non-blank message in order. Any unexpected error propagates and the
        batch response is dropped; results recorded before the error stay in storage.
        """
        resources = self.storage.list_resources()
        results = []
        for msg in messages:
            if not msg.strip():
                continue
            results.append(self.analyze_message(msg, resources))

        # Stable: equal scores keep input order.
        results.sort(key=lambda r: r.urgency_score, reverse=True)
        matched = sum(1 for r in results if r.matched_resource_id)
        logger.info("Analyzed %d message(s); %d matched to a resource", len(results), matched)
        return results
