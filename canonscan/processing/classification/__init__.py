# -*- coding: utf-8 -*-
"""
Classification subpackage: ordered rule cascade (artifact, system, location,
character) and role-alias deduplication of the character bucket.
"""
