from .netstat import parse, format_record, run_netstat, NetstatError, ListingError, ParseError
from .process_table import ProcessTable
from .worker_registry import WorkerProcessRegistry
from .loop import Scheduler
