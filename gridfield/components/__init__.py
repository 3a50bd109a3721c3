"""components — Plain data records attached to fields.

sources   Repulsion
dev_log   DevLog
"""

from gridfield.components.sources import Repulsion
from gridfield.components.dev_log import DevLog
