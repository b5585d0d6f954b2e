import logging
import zipfile
from pathlib import Path

import pytest

from transit_feed.data.feed_loader import FeedLoader, load_feed
from transit_feed.errors import FeedFileError, UnresolvedReferenceError
from transit_feed.models.gtfs import RouteType


@pytest.fixture
def sample_gtfs_dir(tmp_path: Path) -> Path:
    """Create a sample GTFS directory with minimal valid data."""
    gtfs_dir = tmp_path / "gtfs"
    gtfs_dir.mkdir()

    # calendar.txt
    (gtfs_dir / "calendar.txt").write_text(
        "service_id,monday,tuesday,wednesday,thursday,friday,saturday,sunday,start_date,end_date\n"
        "WEEKDAY,1,1,1,1,1,0,0,20240101,20241231\n"
        "WEEKEND,0,0,0,0,0,1,1,20240101,20241231\n"
    )

    # shapes.txt - SHAPE1 rows deliberately out of sequence order
    (gtfs_dir / "shapes.txt").write_text(
        "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
        "SHAPE1,45.3,-73.3,3\n"
        "SHAPE1,45.1,-73.1,1\n"
        "SHAPE1,45.2,-73.2,2\n"
        "SHAPE2,45.5,-73.5,1\n"
        "SHAPE2,45.6,-73.6,2\n"
    )

    # routes.txt
    (gtfs_dir / "routes.txt").write_text(
        "route_id,agency_id,route_short_name,route_long_name,route_type,route_url,route_color,route_text_color\n"
        " 1 ,STM, Green , Ligne verte ,1,http://stm.info/green,008E4F,FFFFFF\n"
        "24,STM,24,Sherbrooke,3,http://stm.info/24,,FFFFFF\n"
    )

    # trips.txt
    (gtfs_dir / "trips.txt").write_text(
        "route_id,service_id,trip_id,trip_headsign,direction_id,shape_id\n"
        "1,WEEKDAY,TRIP1,Angrignon,0,SHAPE1\n"
        "24,WEEKDAY,TRIP2,Cavendish,0,SHAPE2\n"
        "1,WEEKEND,TRIP3,Honoré-Beaugrand,1,\n"
    )

    # stops.txt
    (gtfs_dir / "stops.txt").write_text(
        "stop_id,stop_code,stop_name,stop_lat,stop_lon\n"
        "BERRI,51001,Berri-UQAM,45.515,-73.561\n"
        "MCGILL,52001,McGill,45.503,-73.572\n"
        "51001,51001,Sherbrooke / Saint-Denis,45.518,-73.568\n"
    )

    # stop_times.txt - TRIP1 rows out of sequence order
    (gtfs_dir / "stop_times.txt").write_text(
        "trip_id,arrival_time,departure_time,stop_id,stop_sequence\n"
        "TRIP1,08:05:00,08:05:00,MCGILL,2\n"
        "TRIP1,08:00:00,08:00:00,BERRI,1\n"
        "TRIP2,25:30:00,25:30:00,51001,1\n"
    )

    return gtfs_dir


@pytest.fixture
def sample_gtfs_zip(sample_gtfs_dir: Path, tmp_path: Path) -> Path:
    """Create a sample GTFS ZIP file from the directory."""
    zip_path = tmp_path / "gtfs.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        for file_path in sample_gtfs_dir.iterdir():
            zf.write(file_path, file_path.name)
    return zip_path


class TestFeedLoader:
    """Tests for loading a complete feed."""

    def test_load_from_directory(self, sample_gtfs_dir: Path) -> None:
        """Test that every file is loaded into its map."""
        feed = FeedLoader().load(sample_gtfs_dir)

        assert feed.feed_dir == sample_gtfs_dir
        assert set(feed.calendar_entries) == {"WEEKDAY", "WEEKEND"}
        assert set(feed.shapes) == {"SHAPE1", "SHAPE2"}
        assert set(feed.routes) == {"1", "24"}
        assert set(feed.trips) == {"TRIP1", "TRIP2", "TRIP3"}
        assert set(feed.stops) == {"BERRI", "MCGILL", "51001"}
        assert feed.stop_times_loaded is True
        assert feed.warnings == []

    def test_load_from_zip(self, sample_gtfs_zip: Path) -> None:
        """Test loading the same feed from a ZIP file."""
        feed = load_feed(sample_gtfs_zip)

        assert len(feed.routes) == 2
        assert len(feed.trips) == 3
        assert len(feed.trips["TRIP1"].stop_times) == 2

    def test_nonexistent_path(self, tmp_path: Path) -> None:
        """Test that a missing feed path raises FeedFileError."""
        with pytest.raises(FeedFileError):
            load_feed(tmp_path / "nonexistent")

    def test_logs_row_counts(self, sample_gtfs_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test that per-file row counts are logged."""
        with caplog.at_level(logging.INFO, logger="transit_feed.data.feed_loader"):
            load_feed(sample_gtfs_dir)

        assert "Loaded 5 rows from shapes.txt" in caplog.text
        assert "Loaded 3 rows from trips.txt" in caplog.text


class TestShapes:
    """Tests for shapes.txt grouping and ordering."""

    def test_coords_sorted_by_sequence(self, sample_gtfs_dir: Path) -> None:
        """Test that shuffled shape points end up sorted by sequence."""
        feed = load_feed(sample_gtfs_dir)

        coords = feed.shapes["SHAPE1"].coords
        assert [c.seq for c in coords] == [1, 2, 3]
        assert coords[0].lat == 45.1
        assert coords[0].lon == -73.1
        for a, b in zip(coords, coords[1:]):
            assert a.seq < b.seq

    def test_contiguous_groups(self, sample_gtfs_dir: Path) -> None:
        """Test that two contiguous groups give two shapes with their own points."""
        feed = load_feed(sample_gtfs_dir)

        assert len(feed.shapes) == 2
        assert len(feed.shapes["SHAPE1"].coords) == 3
        assert len(feed.shapes["SHAPE2"].coords) == 2

    def test_non_contiguous_group_last_block_wins(self, sample_gtfs_dir: Path) -> None:
        """Test that a shape id split over two blocks keeps only its last block."""
        (sample_gtfs_dir / "shapes.txt").write_text(
            "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
            "SHAPE1,45.1,-73.1,1\n"
            "SHAPE1,45.2,-73.2,2\n"
            "SHAPE2,45.5,-73.5,1\n"
            "SHAPE1,45.3,-73.3,3\n"
        )
        feed = load_feed(sample_gtfs_dir)

        assert len(feed.shapes) == 2
        assert [c.seq for c in feed.shapes["SHAPE1"].coords] == [3]
        assert len(feed.shapes["SHAPE2"].coords) == 1

    def test_bad_coordinates_default_to_zero(self, sample_gtfs_dir: Path) -> None:
        """Test that unparseable lat/lon keep the row with zero values."""
        (sample_gtfs_dir / "shapes.txt").write_text(
            "shape_id,shape_pt_lat,shape_pt_lon,shape_pt_sequence\n"
            "SHAPE1,north,,1\n"
        )
        feed = load_feed(sample_gtfs_dir)

        coord = feed.shapes["SHAPE1"].coords[0]
        assert coord.lat == 0.0
        assert coord.lon == 0.0


class TestRoutes:
    """Tests for routes.txt decoding."""

    def test_route_fields_trimmed(self, sample_gtfs_dir: Path) -> None:
        """Test that route id and names are trimmed."""
        feed = load_feed(sample_gtfs_dir)

        route = feed.routes["1"]
        assert route.short_name == "Green"
        assert route.long_name == "Ligne verte"
        assert route.route_type == RouteType.SUBWAY

    def test_optional_columns(self, sample_gtfs_dir: Path) -> None:
        """Test that present optional columns are stored and absent ones are None."""
        feed = load_feed(sample_gtfs_dir)

        route = feed.routes["24"]
        assert route.agency_id == "STM"
        assert route.url == "http://stm.info/24"
        assert route.color == ""
        assert route.text_color == "FFFFFF"
        # no route_desc column in the file
        assert route.description is None

    def test_missing_optional_columns_are_none(self, sample_gtfs_dir: Path) -> None:
        """Test a routes.txt with only the required columns."""
        (sample_gtfs_dir / "routes.txt").write_text(
            "route_id,route_short_name,route_long_name,route_type\n"
            "1,Green,Ligne verte,1\n"
            "24,24,Sherbrooke,3\n"
        )
        feed = load_feed(sample_gtfs_dir)

        route = feed.routes["1"]
        assert route.agency_id is None
        assert route.url is None
        assert route.color is None
        assert route.text_color is None

    def test_invalid_route_type_defaults_to_light_rail(self, sample_gtfs_dir: Path) -> None:
        """Test that an unparseable route_type does not reject the row."""
        (sample_gtfs_dir / "routes.txt").write_text(
            "route_id,route_short_name,route_long_name,route_type\n"
            "1,Green,Ligne verte,metro\n"
            "24,24,Sherbrooke,700\n"
        )
        feed = load_feed(sample_gtfs_dir)

        assert feed.routes["1"].route_type == RouteType.LIGHT_RAIL
        assert feed.routes["24"].route_type == RouteType.LIGHT_RAIL


class TestTrips:
    """Tests for trip linking."""

    def test_trips_linked_to_route_in_file_order(self, sample_gtfs_dir: Path) -> None:
        """Test that trips appear once in their route's list, in file order."""
        feed = load_feed(sample_gtfs_dir)

        route = feed.routes["1"]
        assert [t.id for t in route.trips] == ["TRIP1", "TRIP3"]
        assert feed.trips["TRIP1"].route is route
        assert [t.id for t in feed.routes["24"].trips] == ["TRIP2"]

    def test_trip_fields(self, sample_gtfs_dir: Path) -> None:
        """Test trip attributes and shape link."""
        feed = load_feed(sample_gtfs_dir)

        trip = feed.trips["TRIP1"]
        assert trip.service_id == "WEEKDAY"
        assert trip.direction == "0"
        assert trip.headsign == "Angrignon"
        assert trip.shape is feed.shapes["SHAPE1"]

    def test_trip_without_shape(self, sample_gtfs_dir: Path) -> None:
        """Test that an empty shape_id leaves the shape unset without a warning."""
        feed = load_feed(sample_gtfs_dir)

        assert feed.trips["TRIP3"].shape is None
        assert feed.warnings == []

    def test_unknown_route_skips_trip(self, sample_gtfs_dir: Path) -> None:
        """Test that a trip referencing an unknown route is skipped with a warning."""
        with open(sample_gtfs_dir / "trips.txt", "a") as f:
            f.write("999,WEEKDAY,TRIP9,Nowhere,0,SHAPE1\n")

        feed = load_feed(sample_gtfs_dir)

        assert "TRIP9" not in feed.trips
        assert len(feed.warnings) == 1
        warning = feed.warnings[0]
        assert warning.filename == "trips.txt"
        assert warning.row_number == 5
        assert "route_id '999'" in warning.message

    def test_unknown_shape_keeps_trip(self, sample_gtfs_dir: Path) -> None:
        """Test that an unknown shape id keeps the trip without a shape."""
        with open(sample_gtfs_dir / "trips.txt", "a") as f:
            f.write("24,WEEKDAY,TRIP9,Downtown,1,NOSHAPE\n")

        feed = load_feed(sample_gtfs_dir)

        assert feed.trips["TRIP9"].shape is None
        assert feed.trips["TRIP9"] in feed.routes["24"].trips
        assert len(feed.warnings) == 1
        assert "shape_id 'NOSHAPE'" in feed.warnings[0].message

    def test_strict_mode_raises(self, sample_gtfs_dir: Path) -> None:
        """Test that strict mode fails on an unknown route."""
        with open(sample_gtfs_dir / "trips.txt", "a") as f:
            f.write("999,WEEKDAY,TRIP9,Nowhere,0,SHAPE1\n")

        with pytest.raises(UnresolvedReferenceError) as exc_info:
            load_feed(sample_gtfs_dir, strict=True)

        assert exc_info.value.filename == "trips.txt"
        assert exc_info.value.row_number == 5

    def test_unknown_route_logged(
        self, sample_gtfs_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test that skipped rows are logged as warnings."""
        with open(sample_gtfs_dir / "trips.txt", "a") as f:
            f.write("999,WEEKDAY,TRIP9,Nowhere,0,SHAPE1\n")

        with caplog.at_level(logging.WARNING, logger="transit_feed.data.feed_loader"):
            load_feed(sample_gtfs_dir)

        assert "trips.txt row 5" in caplog.text

    def test_row_number_counts_blank_lines(self, sample_gtfs_dir: Path) -> None:
        """Test that a blank line still advances the reported row number."""
        (sample_gtfs_dir / "trips.txt").write_text(
            "route_id,service_id,trip_id,trip_headsign,direction_id,shape_id\n"
            "\n"
            "R9,WEEKDAY,T1,Nowhere,0,\n"
        )

        feed = load_feed(sample_gtfs_dir, load_stop_times=False)

        assert [w.row_number for w in feed.warnings] == [3]

    def test_row_number_counts_multiline_cells(self, sample_gtfs_dir: Path) -> None:
        """Test that a quoted cell spanning two lines is counted as two lines."""
        with open(sample_gtfs_dir / "trips.txt", "a") as f:
            f.write('1,WEEKDAY,TRIP8,"Angrignon\nvia Berri",0,SHAPE1\n')
            f.write("999,WEEKDAY,TRIP9,Nowhere,0,SHAPE1\n")

        feed = load_feed(sample_gtfs_dir)

        assert feed.trips["TRIP8"].headsign == "Angrignon\nvia Berri"
        assert [w.row_number for w in feed.warnings] == [7]


class TestStopTimes:
    """Tests for stop_times.txt loading."""

    def test_stop_times_sorted_by_sequence(self, sample_gtfs_dir: Path) -> None:
        """Test that each trip's stop times are sorted by sequence."""
        feed = load_feed(sample_gtfs_dir)

        stop_times = feed.trips["TRIP1"].stop_times
        assert [st.seq for st in stop_times] == [1, 2]
        assert stop_times[0].stop is feed.stops["BERRI"]
        assert stop_times[0].trip is feed.trips["TRIP1"]
        assert stop_times[0].time == 8 * 3600

    def test_times_past_midnight(self, sample_gtfs_dir: Path) -> None:
        """Test that arrival times after 24:00:00 are not wrapped."""
        feed = load_feed(sample_gtfs_dir)

        assert feed.trips["TRIP2"].stop_times[0].time == 25 * 3600 + 30 * 60

    def test_skip_stop_times(self, sample_gtfs_dir: Path) -> None:
        """Test that stop times are not loaded when not requested."""
        feed = load_feed(sample_gtfs_dir, load_stop_times=False)

        assert feed.stop_times_loaded is False
        for trip in feed.trips.values():
            assert trip.stop_times == []

    def test_skip_stop_times_without_file(self, sample_gtfs_dir: Path) -> None:
        """Test that stop_times.txt is not required when it is skipped."""
        (sample_gtfs_dir / "stop_times.txt").unlink()

        feed = load_feed(sample_gtfs_dir, load_stop_times=False)

        assert len(feed.trips) == 3

    def test_unknown_trip_and_stop_skipped(self, sample_gtfs_dir: Path) -> None:
        """Test that stop times with unknown trip or stop ids are skipped."""
        with open(sample_gtfs_dir / "stop_times.txt", "a") as f:
            f.write("NOTRIP,09:00:00,09:00:00,BERRI,1\n")
            f.write("TRIP2,09:10:00,09:10:00,NOSTOP,2\n")

        feed = load_feed(sample_gtfs_dir)

        assert len(feed.trips["TRIP2"].stop_times) == 1
        assert [w.row_number for w in feed.warnings] == [5, 6]


class TestStructuralFailures:
    """Tests for missing files and unusable headers."""

    @pytest.mark.parametrize(
        "filename",
        ["calendar.txt", "shapes.txt", "routes.txt", "trips.txt", "stops.txt", "stop_times.txt"],
    )
    def test_missing_file(self, sample_gtfs_dir: Path, filename: str) -> None:
        """Test that any missing required file fails the load."""
        (sample_gtfs_dir / filename).unlink()

        with pytest.raises(FeedFileError) as exc_info:
            load_feed(sample_gtfs_dir)

        assert exc_info.value.filename == filename

    def test_missing_file_in_zip(self, sample_gtfs_dir: Path, tmp_path: Path) -> None:
        """Test that a ZIP without routes.txt fails the load."""
        zip_path = tmp_path / "partial.zip"
        with zipfile.ZipFile(zip_path, "w") as zf:
            for file_path in sample_gtfs_dir.iterdir():
                if file_path.name != "routes.txt":
                    zf.write(file_path, file_path.name)

        with pytest.raises(FeedFileError, match="routes.txt"):
            load_feed(zip_path)

    def test_empty_file(self, sample_gtfs_dir: Path) -> None:
        """Test that a file without a header fails the load."""
        (sample_gtfs_dir / "stops.txt").write_text("")

        with pytest.raises(FeedFileError, match="empty"):
            load_feed(sample_gtfs_dir)

    def test_missing_required_column(self, sample_gtfs_dir: Path) -> None:
        """Test that a header lacking a required column fails the load."""
        (sample_gtfs_dir / "trips.txt").write_text(
            "route_id,service_id,trip_headsign\n1,WEEKDAY,Angrignon\n"
        )

        with pytest.raises(FeedFileError, match="trip_id"):
            load_feed(sample_gtfs_dir)
