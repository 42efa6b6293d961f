"""
Modèles de l'annotateur par superpixels.

- AnnotationStore : raster de labels (seul écrivain) et historique
- SegmentIndex : pixels regroupés par superpixel
- HighlightTracker : surlignage transitoire des couches de visualisation
"""

from .annotation_store import AnnotationStore
from .diff_record import DiffRecord
from .errors import AnnotationError, InvalidArgument, InvalidSegmentId, OutOfRange
from .highlight_tracker import HighlightTracker
from .history_log import HistoryLog
from .segment_index import SegmentIndex

__all__ = [
    'AnnotationStore',
    'DiffRecord',
    'AnnotationError',
    'InvalidArgument',
    'InvalidSegmentId',
    'OutOfRange',
    'HighlightTracker',
    'HistoryLog',
    'SegmentIndex',
]
