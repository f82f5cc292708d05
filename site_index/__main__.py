"""Allow ``python -m site_index``."""
from site_index.cli import cli

cli(prog_name="site-index")
