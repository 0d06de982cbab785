# Copyright Red Hat
#
# tests/snapshot/__init__.py - Yggdrasil snapshot tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
