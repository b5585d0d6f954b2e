"""Service calendar queries."""

from transit_feed.models.gtfs import WEEKDAY_COLUMNS, Feed


def active_service_ids(feed: Feed) -> list[str]:
    """List service ids active on each weekday, Monday through Sunday.

    Within a weekday, ids follow calendar.txt order. A service running on
    several days appears once per day, so the result is a multiset: a
    Monday/Wednesday service shows up twice, with Tuesday's ids in between.
    """
    service_ids: list[str] = []
    for weekday in range(len(WEEKDAY_COLUMNS)):
        for service_id, entry in feed.calendar_entries.items():
            if entry.is_active(weekday):
                service_ids.append(service_id)
    return service_ids


def service_ids_by_weekday(feed: Feed) -> dict[str, list[str]]:
    """Group active service ids by weekday column name ("monday".."sunday")."""
    return {
        day: [sid for sid, entry in feed.calendar_entries.items() if entry.is_active(weekday)]
        for weekday, day in enumerate(WEEKDAY_COLUMNS)
    }
