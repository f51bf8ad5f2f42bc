"""Global test fixtures."""

import os

# Keep a developer's ~/.config/sla/config.yaml out of the tests.
# This must happen at module load time, before any test builds a Config.
os.environ["SLA_CONFIG_FILE"] = os.path.join(os.path.dirname(__file__), "no-such-config.yaml")
