from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from leave_engine.services.holiday import HolidaySet, get_default_holidays
from leave_engine.services.year_close import YearCloseMetaStore, get_meta_store

HolidaysDep = Annotated[HolidaySet, Depends(get_default_holidays)]

MetaStoreDep = Annotated[YearCloseMetaStore, Depends(get_meta_store)]
