# Database models
from .donor import Donor
