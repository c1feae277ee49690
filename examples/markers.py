import logging

import torch

from tabulon import TimeSeriesTableVec3

logging.basicConfig(level=logging.INFO)

data_rate = 100
num_frames = 5
marker_names = ["LASI", "RASI", "SACR"]


def build_markers() -> TimeSeriesTableVec3:
    table = TimeSeriesTableVec3()
    table.set_column_labels(marker_names)
    table.add_table_meta_data("DataRate", data_rate)
    table.upd_independent_meta_data().set_value_for_key("labels", "time")
    table.upd_dependents_meta_data().set_value_array_for_key(
        "units", ["mm"] * len(marker_names)
    )

    rng = torch.Generator()
    rng.manual_seed(42)
    for frame in range(num_frames):
        positions = torch.rand((len(marker_names), 3), generator=rng, dtype=torch.float64)
        table.append_row(frame / data_rate, positions * 1000)
    table.validate_dependents_meta_data()
    return table


if __name__ == "__main__":
    markers = build_markers()
    print(markers)

    flat = markers.flatten(["_x", "_y", "_z"])
    print(flat)
    print(flat.get_dependents_meta_data().get_value_array_for_key("units"))
