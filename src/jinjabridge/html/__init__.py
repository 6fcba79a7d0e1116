# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from .attribute import Attribute
from .utility import clean_css_identifier, escape, escape_html_attr, get_class, get_id

__all__ = [
    "Attribute",
    "clean_css_identifier",
    "escape",
    "escape_html_attr",
    "get_class",
    "get_id",
]
