from __future__ import annotations

import base64
import uuid
from typing import List, Optional

from rankboard.ai.gemini_client import GeminiClient
from rankboard.ai.prompts import SYSTEM_INSTRUCTION, TRAILING_INSTRUCTION, source_caption
from rankboard.ai.response_parser import ExtractionResult, parse_extraction
from rankboard.core.errors import AnalysisError, ValidationError
from rankboard.core.logger import AppLogger
from rankboard.ingest.slots import SLOT_SPECS, STOCK_SLOTS, THEME_SLOTS, SlotStore
from rankboard.reports.models import CURRENT_TIMESTAMP, Report, derive_title
from rankboard.reports.report_store import ReportStore

MISSING_IMAGES_MESSAGE = "Upload at least one stock ranking image and one theme image."


class AnalysisPipeline:
    """
    Turns the current slot contents into one Report.

    ``run`` is the trigger used by the UI: it ignores calls while a run is
    in flight and converts failures into ``error_message``. ``execute``
    does the work and raises.
    """
    def __init__(self, slot_store: SlotStore, report_store: ReportStore,
                 client: GeminiClient, logger: AppLogger = None):
        self.slot_store = slot_store
        self.report_store = report_store
        self.client = client
        self.logger = logger or AppLogger()
        self.busy = False
        self.error_message: Optional[str] = None
        self.last_error: Optional[AnalysisError] = None

    def validate(self):
        has_stocks = any(self.slot_store.has_images(name) for name in STOCK_SLOTS)
        has_themes = any(self.slot_store.has_images(name) for name in THEME_SLOTS)
        if not (has_stocks and has_themes):
            raise ValidationError(MISSING_IMAGES_MESSAGE)

    def build_parts(self) -> List[dict]:
        """Caption + inline image per upload, in slot order, then the instruction."""
        parts = []
        for spec in SLOT_SPECS:
            for item in self.slot_store.items(spec.name):
                parts.append({"text": source_caption(spec.label)})
                parts.append({
                    "inline_data": {
                        "mime_type": item.mime_type,
                        "data": base64.b64encode(item.data).decode("utf-8"),
                    }
                })
        parts.append({"text": TRAILING_INSTRUCTION})
        return parts

    @staticmethod
    def build_report(result: ExtractionResult, report_date: str) -> Report:
        return Report(
            id=uuid.uuid4().hex,
            date=report_date,
            title=derive_title(result.extracted_time),
            timestamp=result.extracted_time or CURRENT_TIMESTAMP,
            market_status=result.market_status,
            realtime_stocks=result.realtime_stocks,
            cumulative_stocks=result.cumulative_stocks,
            themes_by_rank=result.themes_by_rank,
            themes_by_change=result.themes_by_change,
        )

    def execute(self, report_date: str) -> Report:
        self.logger.log(f"--- Starting ranking analysis for {report_date} ---")
        self.validate()

        parts = self.build_parts()
        image_count = sum(1 for p in parts if "inline_data" in p)
        self.logger.log(f"1. Built request with {image_count} image(s).")

        text = self.client.extract(parts, SYSTEM_INSTRUCTION)
        self.logger.log("2. Parsing model response...")
        result = parse_extraction(text)

        report = self.build_report(result, report_date)
        self.report_store.insert(report)
        self.slot_store.clear_all()
        self.logger.log(f"--- Success: report '{report.title}' added for {report_date} ---")
        return report

    def run(self, report_date: str) -> Optional[Report]:
        if self.busy:
            self.logger.log("Analysis already running; trigger ignored.")
            return None

        self.busy = True
        self.error_message = None
        self.last_error = None
        try:
            return self.execute(report_date)
        except AnalysisError as e:
            self.last_error = e
            self.error_message = e.user_message
            self.logger.error(f"{type(e).__name__}: {e}")
            return None
        finally:
            self.busy = False


def session_pipeline(state, slot_store: SlotStore, report_store: ReportStore, api_key: Optional[str],
                     model_name: str, logger: AppLogger = None, tracker=None) -> AnalysisPipeline:
    """
    Returns the pipeline kept in ``state`` (Streamlit's session_state or any
    dict), building it on first use so its busy flag outlives reruns.
    Only the model follows the current selection.
    """
    pipeline = state.get("pipeline")
    if pipeline is None:
        client = GeminiClient(api_key, model_name=model_name, logger=logger, tracker=tracker)
        pipeline = AnalysisPipeline(slot_store, report_store, client, logger=logger)
        state["pipeline"] = pipeline
    pipeline.client.model_name = model_name
    return pipeline
