import sys
from pathlib import Path

# Make desktop_app and the itinerary_planner package importable without installing
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
