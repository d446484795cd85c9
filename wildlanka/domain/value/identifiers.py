"""Strongly typed identifiers for WildLanka domain entities."""

from typing import NewType
from uuid import UUID

AccountId = NewType("AccountId", UUID)
