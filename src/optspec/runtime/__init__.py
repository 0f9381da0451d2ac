# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0
