"""TPC-DS table and column names used by the index experiments."""

DEFAULT_TABLES = ("store_sales",)

BASE_TABLE = "store_sales"
DUPLICATE_TABLE = "store_sales_dup"
STAGING_TABLE = "store_sales1"

# high-cardinality key collapsed into the bitmap column
PARTITION_KEY_COLUMN = "ss_item_sk"
DERIVED_COLUMN = "ss_item_sk1"
ORDERED_INDEX_COLUMN = "ss_customer_sk"

DERIVED_CARDINALITY = 1000
