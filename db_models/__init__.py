# Importing the package registers every model on Base.metadata.
from db_models.business_unit import BusinessUnit
from db_models.location import Location
from db_models.asset_category import AssetCategory
from db_models.employee import Employee
from db_models.user import User
from db_models.asset import Asset, AssetType, AssetCondition, AssetStatus

__all__ = [
    "BusinessUnit",
    "Location",
    "AssetCategory",
    "Employee",
    "User",
    "Asset",
    "AssetType",
    "AssetCondition",
    "AssetStatus",
]
