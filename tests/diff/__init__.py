# Copyright Red Hat
#
# tests/diff/__init__.py - Yggdrasil diff tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
