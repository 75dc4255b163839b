# ClaimRegistry - Claims Management Record Service
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Core infrastructure: settings, logging, results, errors and database."""

from .config import Settings, get_settings
from .errors import ErrorKind, ServiceError, ViolationCollector
from .result_types import Err, Ok, Result

__all__ = [
    "Settings",
    "get_settings",
    "ErrorKind",
    "ServiceError",
    "ViolationCollector",
    "Err",
    "Ok",
    "Result",
]
