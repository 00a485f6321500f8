""" Autofix package initialization."""

from .extension import build_parse_hook, run_self_test  # noqa: F401
from .hook import ParseRecoveryHook  # noqa: F401
from .models import RepairFailure, RepairOutcome, RepairSuccess, ToolCallContext  # noqa: F401
from .repair_client import RepairOracleClient  # noqa: F401
from .settings import RepairConfig, get_repair_config, load_repair_config  # noqa: F401
