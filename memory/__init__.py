from .sorted_list import SortedList, OutOfOrderAppendError
from .arm_record import ArmRecord
from .agent_memory import AgentMemory
from . import pull_request
