from enum import Enum

from rules_generator.batch import BuildStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    DIM = "dim"
    WHITE = "white"


BUILD_STATUS_STYLE = {
    BuildStatus.WRITTEN: UIStyle.GREEN.value,
    BuildStatus.NONCONFORMING: UIStyle.YELLOW.value,
    BuildStatus.FAILED: UIStyle.RED.value,
}
