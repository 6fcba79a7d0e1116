# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Jinja2 bridge between templates and a content-management framework."""

from .extension import (
    BridgeEnvironment,
    BridgeExtension,
    FrameworkServices,
    ServiceBridgeExtension,
    TemplateCallable,
    UnprintableObjectError,
    create_environment,
    is_url_generation_safe,
)
from .html import Attribute
from .url import Url

__version__ = "0.3.0"

__all__ = [
    "Attribute",
    "BridgeEnvironment",
    "BridgeExtension",
    "FrameworkServices",
    "ServiceBridgeExtension",
    "TemplateCallable",
    "UnprintableObjectError",
    "Url",
    "__version__",
    "create_environment",
    "is_url_generation_safe",
]
