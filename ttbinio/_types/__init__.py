from ttbinio._types.base import *
from ttbinio._types import columns as special_columns
from ttbinio._types.activitydata import ActivityData
