from __future__ import annotations

import io
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from freightdesk.app.api.deps import get_report_builder
from freightdesk.app.core.config import settings
from freightdesk.app.core.errors import RenderError, UpstreamFetchError, ValidationError
from freightdesk.app.schemas.reports import (
    OrderSummaryResponse,
    OrderSummaryRowOut,
    OrderSummaryTotalsOut,
)
from freightdesk.app.services.order_summary import OrderSummaryReportBuilder, SummaryOrdering

router = APIRouter()

_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_XML_MIME = "application/xml"


# ── Helpers ──────────────────────────────────────────────────────────────────


def _export_response(
    buf: io.BytesIO, media_type: str, filename: str,
) -> StreamingResponse:
    return StreamingResponse(
        buf,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _report_failure(e: Exception) -> HTTPException:
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    # Details are already logged by the builder.
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate report",
    )


# ── Order Summary ────────────────────────────────────────────────────────────


@router.get("/order-summary", response_model=OrderSummaryResponse)
def order_summary(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    currency: str = Query(settings.REPORT_DEFAULT_CURRENCY),
    ordering: SummaryOrdering | None = Query(None),
    builder: OrderSummaryReportBuilder = Depends(get_report_builder),
) -> OrderSummaryResponse:
    try:
        table = builder.build_table(start_date, end_date, currency, ordering)
    except (ValidationError, UpstreamFetchError) as e:
        raise _report_failure(e)

    summary = table.summary
    return OrderSummaryResponse(
        currency=summary.currency,
        ordering=summary.ordering.value,
        start_date=summary.start_date.isoformat() if summary.start_date else None,
        end_date=summary.end_date.isoformat() if summary.end_date else None,
        rows=[OrderSummaryRowOut.model_validate(r) for r in summary.rows],
        totals=OrderSummaryTotalsOut.model_validate(table.totals),
    )


@router.get("/order-summary/export/excel")
def order_summary_export_excel(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    currency: str = Query(settings.REPORT_DEFAULT_CURRENCY),
    ordering: SummaryOrdering | None = Query(None),
    lang: str = Query("en"),
    builder: OrderSummaryReportBuilder = Depends(get_report_builder),
) -> StreamingResponse:
    try:
        buf = builder.export_excel(start_date, end_date, currency, ordering, lang=lang)
    except (ValidationError, UpstreamFetchError, RenderError) as e:
        raise _report_failure(e)
    return _export_response(buf, _XLSX_MIME, "orders.xlsx")


@router.get("/order-summary/export/xml")
def order_summary_export_xml(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    currency: str = Query(settings.REPORT_DEFAULT_CURRENCY),
    ordering: SummaryOrdering | None = Query(None),
    builder: OrderSummaryReportBuilder = Depends(get_report_builder),
) -> StreamingResponse:
    try:
        buf = builder.export_xml(start_date, end_date, currency, ordering)
    except (ValidationError, UpstreamFetchError, RenderError) as e:
        raise _report_failure(e)
    return _export_response(buf, _XML_MIME, "orders.xml")
