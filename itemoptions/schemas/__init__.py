from itemoptions.schemas.property import PropertyCreate, PropertyResponse
from itemoptions.schemas.options import OptionValuesResponse, OptionValuesUpdate, OptionValuesUpdateResult, ReconcileSummary
