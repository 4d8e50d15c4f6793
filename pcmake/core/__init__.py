# SPDX-License-Identifier: MIT
"""Core model and emission helpers for pcmake."""
