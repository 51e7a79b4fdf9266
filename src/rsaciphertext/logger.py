"""Package-wide logger. No handlers are installed here, that is left to the application."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

logger = logging.getLogger("rsaciphertext")
