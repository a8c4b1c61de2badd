"""
Runtime environment detection.
"""

import os
from typing import Mapping, Optional

from ..config import config


def is_lambda(environ: Optional[Mapping[str, str]] = None, variable: Optional[str] = None) -> bool:
    """
    Return True if the current process runs in an AWS Lambda container.

    Determined by the presence of a non-empty environment variable,
    AWS_LAMBDA_RUNTIME_API unless configured otherwise.
    """
    if environ is None:
        environ = os.environ
    if variable is None:
        variable = config.LAMBDA_DETECT_ENV_VAR
    return bool(environ.get(variable))
