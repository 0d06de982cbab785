# Copyright Red Hat
#
# tests/scanner/__init__.py - Yggdrasil scanner tests
#
# This file is part of the ygg project.
#
# SPDX-License-Identifier: Apache-2.0
