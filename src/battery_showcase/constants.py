APP_NAME = "Battery Showcase"
LOG_PATH = "battery_showcase.log"

BATTERY_CHECK_INTERVAL_SEC = 60
READ_TIMEOUT_SEC = 5
VERTICAL_OFFSET_PX = 150

EXAMPLE_BUTTON_MESSAGE = "Example button clicked!"
BATTERY_LEVEL_TEMPLATE = "Battery level: {level}%"
MAX_BACKOFF_SEC = 60 * 60
