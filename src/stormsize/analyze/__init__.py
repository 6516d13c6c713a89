from .classifier import ClassifierParams, SegmentClassifier
from .enforcer import MonotonicConstraintEnforcer, running_maximum
from .flow_order import ConnectivityFlowOrder, ElevationFlowOrder
from .resolver import DiameterResolver

__all__ = [
    "ClassifierParams",
    "SegmentClassifier",
    "DiameterResolver",
    "ElevationFlowOrder",
    "ConnectivityFlowOrder",
    "MonotonicConstraintEnforcer",
    "running_maximum",
]
