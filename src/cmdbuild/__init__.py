"""cmdbuild - A minimal build-script framework: named targets, subprocess runs, accumulated errors."""

from .build import GO as GO
from .build import Build as Build
from .commands import Command as Command
from .dispatch import BuildResult as BuildResult
from .errors import BuildError as BuildError
from .errors import ExecutionError as ExecutionError
from .errors import RegistrationError as RegistrationError
from .errors import UnknownTargetError as UnknownTargetError
from .options import BuildOptions as BuildOptions
