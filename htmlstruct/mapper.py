"""
htmlstruct - Core Record Mapping Engine

Fills dataclass or pydantic records from HTML documents using the selectors
declared in their field tags, one record per document or one record per
node matched by a collection selector.
"""

import logging
from typing import Any, List, Optional, Tuple, Type, TypeVar

from .config import config
from .errors import AssignmentError, ExtractionError
from .fields import FieldDescriptor, assign_field, build_tag_index, describe_fields, new_record
from .models import ExtractionReport
from .normalizer import Normalizer, default_normalizer
from .selectors import inner_text, parse_html, resolve_one, resolve_scopes

logger = logging.getLogger(__name__)

T = TypeVar('T')


class RecordMapper:
    """
    Tag-driven HTML record mapper

    Reads the selector stored under one annotation key in each field tag
    and fills records from a document or from every node matched by a
    collection selector. Selectors are XPath unless the key is "css".
    """

    def __init__(self, key: Optional[str] = None, normalizer: Optional[Normalizer] = None,
                 collect_report: bool = False):
        """
        Args:
            key: Annotation key to read from field tags (defaults to config)
            normalizer: Value normalization policy
            collect_report: Keep an ExtractionReport of the latest call
        """
        self.key = key or config.TAG_KEY
        self.selector_type = 'css' if self.key.lower() == 'css' else 'xpath'
        self.normalizer = normalizer or default_normalizer
        self.collect_report = collect_report
        self.last_report: Optional[ExtractionReport] = None

    def tag_index(self, record_type: Type) -> dict:
        """Field -> selector mapping for record_type under this mapper's key"""
        return build_tag_index(record_type, self.key)

    def build_one(self, record_type: Type[T], root: Any) -> T:
        """
        Fill one record from a document root

        Fields whose selector matches nothing, or whose text is blank, keep
        their zero value.

        Args:
            record_type: Dataclass or pydantic model class
            root: Document or element to evaluate selectors against

        Returns:
            A new record_type instance

        Raises:
            ExtractionError: if a value cannot be assigned to its field
        """
        report = self._start_report(record_type)
        plan = self._plan(record_type, report)

        record = self._fill(record_type, root, plan, report)

        logger.info(f"Built {record_type.__name__} using {len(plan)} '{self.key}' selectors")
        return record

    def build_many(self, record_type: Type[T], root: Any, selector: str) -> List[T]:
        """
        Fill one record per node matched by a collection selector

        Field selectors are evaluated with the matched node as context, so
        relative expressions (".//span") stay inside that node.

        Args:
            record_type: Dataclass or pydantic model class
            root: Document or element to search
            selector: Collection selector locating each record's node

        Returns:
            Records in document order; empty when nothing matches

        Raises:
            ExtractionError: if any value cannot be assigned; no partial
                result is returned
        """
        report = self._start_report(record_type)
        plan = self._plan(record_type, report)

        many = []
        for ancestor in resolve_scopes(root, selector, self.selector_type):
            many.append(self._fill(record_type, ancestor, plan, report))

        logger.info(f"Built {len(many)} {record_type.__name__} records from {selector!r}")
        return many

    def build_one_from_text(self, record_type: Type[T], html_text: str) -> T:
        """Parse html_text and fill one record from it"""
        doc = parse_html(html_text)
        try:
            return self.build_one(record_type, doc)
        except ExtractionError as e:
            raise e.with_context("parsing html doc") from e.cause

    def build_many_from_text(self, record_type: Type[T], html_text: str, selector: str) -> List[T]:
        """Parse html_text and fill one record per collection match"""
        doc = parse_html(html_text)
        try:
            return self.build_many(record_type, doc, selector)
        except ExtractionError as e:
            raise e.with_context("parsing html doc") from e.cause

    def _plan(self, record_type: Type,
              report: Optional[ExtractionReport]) -> List[Tuple[FieldDescriptor, str]]:
        """Resolvable (field, selector) pairs, skip markers removed"""
        plan = []

        for descriptor in describe_fields(record_type):
            selector = descriptor.annotation(self.key)
            if not selector:
                continue

            if report is not None:
                report.fields_indexed += 1

            if config.is_skipped(selector):
                logger.debug(f"Skipping field {descriptor.name}: {selector!r}")
                if report is not None:
                    report.fields_skipped.append(descriptor.name)
                continue

            plan.append((descriptor, selector))

        return plan

    def _fill(self, record_type: Type[T], scope: Any, plan: List[Tuple[FieldDescriptor, str]],
              report: Optional[ExtractionReport]) -> T:
        """Resolve, normalize and assign every planned field into a new record"""
        record = new_record(record_type)
        assigned = 0

        for descriptor, selector in plan:
            node = resolve_one(scope, selector, self.selector_type)
            if node is None:
                logger.debug(f"No node for {descriptor.name}: {selector!r}")
                continue

            text = inner_text(node)
            if not text.strip():
                continue

            value = self.normalizer.normalize(descriptor.name, text, descriptor.annotations)

            try:
                assign_field(descriptor.name, record, value)
            except AssignmentError as e:
                raise ExtractionError(descriptor.name, e) from e

            assigned += 1
            logger.debug(f"Mapped {descriptor.name}: {value}")

        if report is not None:
            report.records_built += 1
            report.fields_assigned += assigned
            report.fields_empty += len(plan) - assigned

        return record

    def _start_report(self, record_type: Type) -> Optional[ExtractionReport]:
        if not self.collect_report:
            return None
        self.last_report = ExtractionReport(
            record_type=record_type.__name__,
            annotation_key=self.key
        )
        return self.last_report


def build_one(record_type: Type[T], root: Any, key: Optional[str] = None) -> T:
    """Fill one record from a parsed document (see RecordMapper.build_one)"""
    return RecordMapper(key).build_one(record_type, root)


def build_many(record_type: Type[T], root: Any, selector: str, key: Optional[str] = None) -> List[T]:
    """Fill one record per collection match (see RecordMapper.build_many)"""
    return RecordMapper(key).build_many(record_type, root, selector)


def build_one_from_text(record_type: Type[T], html_text: str, key: Optional[str] = None) -> T:
    """Parse HTML text and fill one record"""
    return RecordMapper(key).build_one_from_text(record_type, html_text)


def build_many_from_text(record_type: Type[T], html_text: str, selector: str,
                         key: Optional[str] = None) -> List[T]:
    """Parse HTML text and fill one record per collection match"""
    return RecordMapper(key).build_many_from_text(record_type, html_text, selector)
