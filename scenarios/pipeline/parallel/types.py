# scenarios/pipeline/parallel/types.py
from enum import Enum


class LoopState(str, Enum):
    SCHEDULING = "scheduling"
    DRAINING = "draining"
    FINISHED = "finished"
