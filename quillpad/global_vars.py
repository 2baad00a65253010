"""global variables for the quillpad application.

This module contains global variables that are used throughout the application, such as the portable user data directory and the parsed command-line arguments.
"""

import sys
from pathlib import Path

# base directory of the application executable
base_path = Path(
	sys.executable if getattr(sys, "frozen", False) else __file__
).parent

# application configuration inside the base directory (usefull for portable installations)
user_data_path = (
	base_path / Path("user_data")
	if (base_path / "user_data").exists()
	else None
)

# command-line arguments parsed by the application
args = None
