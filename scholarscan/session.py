import logging
from enum import Enum
from typing import Optional

from .agents.reviewer import ReviewRequestError, analyze_document
from .config import Config
from .parsing.ingest import UploadSource, read_upload
from .parsing.validation import accept_keyword_edit, check_submission
from .schemas import (
    AVAILABLE_CRITERIA,
    CritiqueLevel, CustomCriterion, FileData, ReviewCategory, ReviewConfiguration, ReviewFeedback,
    default_custom_criteria,
)

logger = logging.getLogger(__name__)


class ReviewStatus(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ReviewSession:
    """In-memory state for one user's review: configuration, document and request lifecycle.

    Only one request runs at a time. Each submission takes a new epoch; a result
    whose epoch no longer matches (because the session was reset meanwhile) is dropped.
    """

    def __init__(self, llm=None, config: Config = None):
        self.llm = llm
        self.config = config or Config()
        self.configuration = ReviewConfiguration(
            custom_criteria=default_custom_criteria(self.config.default_custom_criteria))
        self.text = ""
        self.file: Optional[FileData] = None
        self.status = ReviewStatus.IDLE
        self.error: Optional[str] = None
        self.feedback: Optional[ReviewFeedback] = None
        self.epoch = 0

    # -- configuration ------------------------------------------------------

    def set_category(self, category: ReviewCategory):
        self.configuration.category = ReviewCategory(category)

    def set_critique_level(self, level: CritiqueLevel):
        self.configuration.critique_level = CritiqueLevel(level)

    def toggle_criterion(self, criterion: str):
        selected = self.configuration.selected_criteria
        if criterion in selected:
            self.configuration.selected_criteria = [c for c in selected if c != criterion]
        else:
            self.configuration.selected_criteria = selected + [criterion]

    @property
    def all_selected(self) -> bool:
        return all(c in self.configuration.selected_criteria for c in AVAILABLE_CRITERIA)

    def toggle_select_all(self):
        self.configuration.selected_criteria = [] if self.all_selected else list(AVAILABLE_CRITERIA)

    def custom_criterion(self, criterion_id: str) -> CustomCriterion:
        for c in self.configuration.custom_criteria:
            if c.id == criterion_id:
                return c
        raise KeyError(f"no custom criterion with id {criterion_id!r}")

    def edit_custom_criterion(self, criterion_id: str, field: str, value: str) -> bool:
        """Apply an edit to a custom criterion. Returns False when the keyword cap rejected it."""
        if field not in ("name", "keywords"):
            raise ValueError(f"unknown custom criterion field: {field}")
        criterion = self.custom_criterion(criterion_id)
        if field == "keywords" and not accept_keyword_edit(criterion.keywords, value,
                                                           self.config.max_keyword_words):
            return False
        setattr(criterion, field, value)
        return True

    def add_custom_criterion(self) -> CustomCriterion:
        used = {c.id for c in self.configuration.custom_criteria}
        next_id = 1
        while str(next_id) in used:
            next_id += 1
        criterion = CustomCriterion(id=str(next_id))
        self.configuration.custom_criteria.append(criterion)
        return criterion

    def remove_custom_criterion(self, criterion_id: str):
        self.configuration.custom_criteria = [
            c for c in self.configuration.custom_criteria if c.id != criterion_id]

    # -- document -----------------------------------------------------------

    def set_text(self, text: str):
        self.text = text

    async def attach_file(self, source: UploadSource, filename: Optional[str] = None) -> bool:
        result = await read_upload(source, filename, self.config)
        if result.error:
            self.error = result.error
            return False
        self.file = result.file
        self.error = None
        return True

    def clear_file(self):
        self.file = None

    # -- request lifecycle --------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.status == ReviewStatus.LOADING

    @property
    def can_submit(self) -> bool:
        return not self.is_loading

    async def submit(self) -> ReviewStatus:
        if self.is_loading:
            logger.debug("Ignoring submit while a review is in flight")
            return self.status

        error = check_submission(self.text, self.file, self.configuration.selected_criteria,
                                 self.configuration.custom_criteria)
        if error:
            # rejected before dispatch; state is left as it was
            self.error = error
            return self.status

        self.epoch += 1
        epoch = self.epoch
        self.status = ReviewStatus.LOADING
        self.error = None
        self.feedback = None

        try:
            feedback = await analyze_document(self.llm, self.configuration, self.text, self.file, self.config)
        except ReviewRequestError as e:
            if epoch == self.epoch:
                self.status = ReviewStatus.FAILED
                self.error = str(e)
            else:
                logger.info("Dropping failure from stale review request %d", epoch)
            return self.status

        if epoch != self.epoch:
            logger.info("Dropping result from stale review request %d", epoch)
            return self.status
        self.feedback = feedback
        self.status = ReviewStatus.SUCCEEDED
        return self.status

    def reset(self):
        """Start a new review: everything back to defaults."""
        self.epoch += 1
        self.status = ReviewStatus.IDLE
        self.error = None
        self.feedback = None
        self.text = ""
        self.file = None
        self.configuration.selected_criteria = []
        self.configuration.critique_level = CritiqueLevel.STANDARD
        self.configuration.custom_criteria = default_custom_criteria(self.config.default_custom_criteria)
