from .maramataka import (
    FishingRating,
    BiteQuality,
    LOWEST_BITE_QUALITY,
    PhaseRecord,
    PresentWindow,
    AbsentWindow,
    Window,
    BiteWindows,
    MoonEventsVM,
    SunEventsVM,
    CatalogEntry,
    PhaseForDate,
    DailyOutlook,
    CalendarDay,
    MonthCalendar,
)

from .trips import (
    TripIn,
    Trip,
    FishCatchIn,
    FishCatch,
    WeatherLogIn,
    WeatherLog,
    TripDetail,
)
