from .customer import (CustomerCreate, CustomerPatch, CustomerDetail, CustomerResponse,
                       CustomerListResponse, CustomerPage, CreateCustomerRequest, PatchCustomerRequest)
from .verification import VerificationDetail, UpdateVerificationRequest
