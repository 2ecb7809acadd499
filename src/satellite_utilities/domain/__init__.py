# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Domain layer: element records, payload parsers, catalogs and astronomy
helpers. No network or filesystem access.
"""
