"""kiln - process-wide execution context for the kiln build tool."""

from .context import Context as Context
from .dirs import AppDirs as AppDirs
from .errors import ExecutableResolutionError as ExecutableResolutionError
from .errors import InvariantViolation as InvariantViolation
from .errors import KilnError as KilnError
from .errors import LockAcquisitionError as LockAcquisitionError
from .errors import ManifestNotFoundError as ManifestNotFoundError
from .exe import ResolutionAttempt as ResolutionAttempt
from .flock import AdvisoryLock as AdvisoryLock
from .flock import Filesystem as Filesystem
from .logs import init_logging as init_logging
from .manifest import find_manifest_path as find_manifest_path
from .once import OnceCell as OnceCell
from .system import System as System
from .ui import OutputFormat as OutputFormat
from .ui import Ui as Ui
from .ui import Verbosity as Verbosity
