import tabulate

# Executed on colframe import since core modules import the display settings from here
tabulate.PRESERVE_WHITESPACE = True

# Display; longer data gets shortened to DISPLAY_EDGE_ROWS at each end
DISPLAY_MAX_ROWS = 50
DISPLAY_EDGE_ROWS = 20

# Series buffers start at this capacity and double when full
INITIAL_CAPACITY = 16

# CSV
DEFAULT_DELIMITER = ','
DEFAULT_QUOTE = '"'
DEFAULT_ENCODING = 'utf-8'
# one of 'schema', 'strict', 'infer'; see io.csv.Reader
DEFAULT_TYPE_RESOLUTION = 'schema'
GZIP_MAGIC = b'\x1f\x8b'
