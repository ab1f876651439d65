from .shortname import derive_short_name
from .resolver import IdentityResolver
from .reconcile import TargetTracker, DefaultTracker
from .cycle import ObservationCycle, NamedObservationCycle, GroupedReport, make_cycle
from .snapshot import Snapshot
