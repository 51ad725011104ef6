# SPDX-License-Identifier: AGPL-3.0-only

"""
Mind map service: turns an explanation into Mermaid flowchart source.
"""
import logging
from typing import Dict, Any

from common.llm_client import LLMClient
from common.metrics import RequestMetrics
from mindmap.diagram import extract_diagram
from mindmap.prompt_pack import MINDMAP_PARAMS, build_mindmap_prompt

logger = logging.getLogger(__name__)


class MindMapService:
    """Service to draw an explanation as a mind map."""

    def __init__(self, llm_client: LLMClient = None):
        self.llm_client = llm_client or LLMClient()

    def process(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Args:
            params: {explanation, topic}

        Returns:
            {mermaidDiagram}
        """
        metrics = RequestMetrics("mindmap")

        prompt = build_mindmap_prompt(params["explanation"], params["topic"])
        raw = self.llm_client.generate("", prompt, MINDMAP_PARAMS)
        metrics.add_llm_call()
        metrics.mark_stage("llm_done")

        diagram = extract_diagram(raw, params["topic"])
        metrics.mark_stage("extraction_done")

        metrics.finish()
        logger.debug("Mind map metrics: %s", metrics.to_dict())
        return {"mermaidDiagram": diagram}
