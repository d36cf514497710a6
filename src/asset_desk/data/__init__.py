"""
Data exchange module for the Digital Asset Desk.

Provides CSV export and import of asset collections.
"""

from asset_desk.data.export import (
    DataLoadError,
    assets_to_dataframe,
    export_assets_csv,
    load_asset_inputs_csv,
)

__all__ = [
    "DataLoadError",
    "assets_to_dataframe",
    "export_assets_csv",
    "load_asset_inputs_csv",
]
