from .base import Base

from .user import User, UserRole
from .pet import Pet
from .walk import Walk, WalkStatus, walk_pets
from .walk_map import WalkMap, WalkLocation
from .walker_setting import WalkerSetting
from .payment import Payment
