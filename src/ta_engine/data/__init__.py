from .loaders import load_series_csv, series_from_dataframe

__all__ = ["load_series_csv", "series_from_dataframe"]
