"""
CSV export and import of asset collections.

Exports write one row per asset with tags joined by ";". Imports read rows
back as AssetInput values; they are validated when passed to the asset
store, not here.
"""

from pathlib import Path

import pandas as pd

from asset_desk.models import Asset, AssetInput


EXPORT_COLUMNS = [
    "id",
    "name",
    "type",
    "status",
    "cost",
    "expiration_date",
    "tags",
    "created_at",
    "updated_at",
]
REQUIRED_IMPORT_COLUMNS = ["name", "type"]
TAG_SEPARATOR = ";"


class DataLoadError(Exception):
    """Raised when data cannot be loaded or is invalid."""
    pass


def assets_to_dataframe(assets: list[Asset]) -> pd.DataFrame:
    """
    Tabulate assets for export or display.

    Args:
        assets: Assets to tabulate

    Returns:
        DataFrame with EXPORT_COLUMNS, plain string/float values
    """
    rows = []
    for asset in assets:
        rows.append({
            "id": asset.id,
            "name": asset.name,
            "type": asset.type.value,
            "status": asset.status.value,
            "cost": str(asset.cost),
            "expiration_date": asset.expiration_date.isoformat() if asset.expiration_date else "",
            "tags": TAG_SEPARATOR.join(asset.tags),
            "created_at": asset.created_at.isoformat(),
            "updated_at": asset.updated_at.isoformat(),
        })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def export_assets_csv(assets: list[Asset], output_path: str | Path) -> Path:
    """
    Save assets to a CSV file.

    Args:
        assets: Assets to save
        output_path: Destination file (parent directories are created)

    Returns:
        The written path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    assets_to_dataframe(assets).to_csv(output_path, index=False)
    return output_path


def load_asset_inputs_csv(file_path: str | Path) -> list[AssetInput]:
    """
    Load asset rows from a CSV file.

    Only name and type are required columns; status defaults to online,
    cost to 0, and a missing expiration_date means "does not expire".
    Extra columns (id, timestamps) are ignored.

    Args:
        file_path: CSV file to read

    Returns:
        List of AssetInput values in file order

    Raises:
        DataLoadError: If the file cannot be read or lacks required columns
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Cannot parse {file_path}: {e}")

    missing = [c for c in REQUIRED_IMPORT_COLUMNS if c not in df.columns]
    if missing:
        raise DataLoadError(f"Missing required columns in {file_path}: {', '.join(missing)}")

    inputs = []
    for _, row in df.iterrows():
        tags = row.get("tags", "")
        inputs.append(
            AssetInput(
                name=row["name"],
                type=row["type"],
                status=row.get("status", "") or "online",
                cost=row.get("cost", "") or "0",
                expiration_date=row.get("expiration_date", "") or None,
                tags=[t for t in tags.split(TAG_SEPARATOR)] if tags else [],
            )
        )

    return inputs
