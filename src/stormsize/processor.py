"""Storm pipe sizer orchestrating classification, lookup and the no-reduction rule.

This module provides the StormPipeSizer class that composes the sizing
steps into one pass following the orchestrator pattern.
"""

import logging
from collections.abc import Iterable

import numpy as np

from .analyze import (
    DiameterResolver,
    ElevationFlowOrder,
    MonotonicConstraintEnforcer,
    SegmentClassifier,
)
from .config import MIN_FLOW_GPM
from .models import ClassifiedSegment, SegmentInput, SizingReport
from .protocols import IDiameterTables, IFlowOrder, IResultWriter, ISegmentSource
from .tables import IPC_CODE_TABLES

log = logging.getLogger(__name__)


class StormPipeSizer:
    """Sizes storm pipe segments per the plumbing code tables.

    This class coordinates the entire sizing pipeline:
    1. Minimum flow filter
    2. Classification and diameter lookup per segment
    3. Ordering of all segments in the direction of flow
    4. No-reduction rule in one pass over the ordered segments

    The sizer keeps no state between runs.
    """

    def __init__(
        self,
        tables: IDiameterTables = IPC_CODE_TABLES,
        classifier: SegmentClassifier | None = None,
        flow_order: IFlowOrder | None = None,
        min_flow: float = MIN_FLOW_GPM,
    ) -> None:
        """Initialize the sizer.

        Parameters
        ----------
        tables : IDiameterTables
            Code tables used for the diameter lookup
        classifier : SegmentClassifier | None
            Segment classifier, uses default parameters if None
        flow_order : IFlowOrder | None
            Ordering strategy, uses elevation order if None
        min_flow : float
            Segments with less flow (GPM) are passed through unsized
        """
        self.resolver = DiameterResolver(tables)
        self.classifier = classifier or SegmentClassifier()
        self.flow_order = flow_order or ElevationFlowOrder()
        self.enforcer = MonotonicConstraintEnforcer()
        self.min_flow = min_flow

    def classify(self, segment: SegmentInput) -> ClassifiedSegment:
        orientation, slope = self.classifier.classify(segment)
        required = self.resolver.resolve(segment.flow, orientation, slope)
        return ClassifiedSegment(
            segment=segment,
            orientation=orientation,
            slope=slope,
            required_diameter=required,
        )

    def size(self, segments: Iterable[SegmentInput] | None) -> SizingReport:
        """Size all segments.

        Parameters
        ----------
        segments : Iterable[SegmentInput] | None
            Segments of the storm system, in any order

        Returns
        -------
        SizingReport
            Results in flow order and the skipped low-flow segments

        Raises
        ------
        ValueError
            If no segment collection is given
        """
        if segments is None:
            raise ValueError("No segments given to size")

        report = SizingReport()
        classified = []
        for segment in segments:
            if not np.isfinite(segment.flow):
                log.warning(f"Skipping segment {segment.identity!r} with non-finite flow {segment.flow}")
                report.skipped.append(segment)
                continue
            if segment.flow < self.min_flow:
                log.debug(f"Skipping segment {segment.identity!r} with {segment.flow} GPM")
                report.skipped.append(segment)
                continue
            classified.append(self.classify(segment))

        log.info(f"Sizing {len(classified)} segments, {len(report.skipped)} skipped below {self.min_flow} GPM")
        ordered = self.flow_order.order(classified)
        report.results = self.enforcer.enforce(ordered)
        log.info(f"{report.raised_count} segments raised by the no-reduction rule")
        return report

    def size_from(self, source: ISegmentSource) -> SizingReport:
        return self.size(source.read_segments())

    def export(self, report: SizingReport, writer: IResultWriter) -> None:
        writer.write_results(report)
