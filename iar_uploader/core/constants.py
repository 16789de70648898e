# Destination columns, in table order
IAR_COLUMNS = [
    "purchase_order_no",
    "date_of_delivery",
    "date_of_preparation_of_iar",
    "prepared_by",
    "iar_no",
    "particulars",
    "iar_amount",
    "timeline_10wd",
    "supplier_name",
    "delivery_status",
]

DATE_COLUMNS = ["date_of_delivery", "date_of_preparation_of_iar"]

CONNECTIVITY_QUERY = "SELECT 1 AS ok"
CONNECTIVITY_OK_MESSAGE = "Database connection successful."
CONNECTIVITY_FAILED_MESSAGE = "Database connection failed."

LOG_EXCLUDE_PATHS = [
    "/health",
    "/static",
]
