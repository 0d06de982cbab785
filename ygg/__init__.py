# Copyright Red Hat
#
# ygg/__init__.py - Yggdrasil package initialisation
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
"""
Ygg top-level package.
"""
from ._ygg import *  # noqa: F401, F403
from ._ygg import __all__  # noqa: F401

__version__ = "0.4.0"
