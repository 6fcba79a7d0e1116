# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Global pytest configuration and fixtures.

Fixtures build the bridge environment on top of the static reference services
so templates can be rendered end to end without a framework.
"""

import pytest

from jinjabridge.config import load_config
from jinjabridge.extension import ServiceBridgeExtension, create_environment
from jinjabridge.reference import build_static_services


@pytest.fixture
def bridge_config():
    """Packaged default config with a few extra routes and translations."""
    return load_config(
        overrides={
            "routes": {
                "entity.node.edit_form": "/node/{node}/edit",
                "search.view": "/search",
                "legacy.search": "/legacy?type=all&sort=asc",
            },
            "translations": {
                "Hello": "Hallo",
                "Welcome, @name": "Willkommen, @name",
            },
        }
    )


@pytest.fixture
def services(bridge_config):
    return build_static_services(bridge_config)


@pytest.fixture
def env(services, bridge_config):
    return create_environment(services, bridge_config)


@pytest.fixture
def extension(env) -> ServiceBridgeExtension:
    return env.extensions[ServiceBridgeExtension.identifier]


@pytest.fixture
def render(env):
    """Render a template string with the bridge environment."""

    def _render(source: str, **context) -> str:
        return env.from_string(source).render(**context)

    return _render
