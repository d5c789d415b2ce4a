from .customer import Customer
from .verification import Verification
