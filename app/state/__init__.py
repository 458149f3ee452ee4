from __future__ import annotations

from . import schema
from . import services
