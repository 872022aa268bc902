from stravakit.services.activity import ActivityService
from stravakit.services.athlete import AthleteService
from stravakit.services.segment import SegmentService
from stravakit.services.segment_effort import SegmentEffortService
from stravakit.services.stream import StreamService
from stravakit.models import EntityType

SERVICE_CLASSES = {
    EntityType.ATHLETE: AthleteService,
    EntityType.ACTIVITY: ActivityService,
    EntityType.SEGMENT: SegmentService,
    EntityType.SEGMENT_EFFORT: SegmentEffortService,
    EntityType.STREAM: StreamService,
}

__all__ = [
    'ActivityService', 'AthleteService', 'SegmentService', 'SegmentEffortService',
    'StreamService', 'SERVICE_CLASSES',
]
