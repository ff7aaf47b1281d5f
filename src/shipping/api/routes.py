"""FastAPI routes for the Shipping domain — cargo booking, tracking and handling."""

from fastapi import APIRouter, Depends

from shipping.api.schemas import (
    AssignRouteRequest,
    BookCargoRequest,
    ChangeDestinationRequest,
    HandlingEventIdResponse,
    LegSchema,
    LocationResponse,
    RegisterHandlingEventRequest,
    RouteCandidateSchema,
    StatusResponse,
    TrackingIdResponse,
)
from shipping.booking.assembler import CargoView
from shipping.booking.service import BookingService
from shipping.cargo.cargo import itinerary_from_json
from shipping.cargo.itinerary import Itinerary


def get_booking_service() -> BookingService:
    return BookingService()


def _to_schema(itinerary: Itinerary) -> RouteCandidateSchema:
    return RouteCandidateSchema(
        legs=[
            LegSchema(
                voyage_number=leg.voyage_number,
                load_location=leg.load_location,
                unload_location=leg.unload_location,
                load_time=leg.load_time,
                unload_time=leg.unload_time,
            )
            for leg in itinerary.legs
        ]
    )


# ---------------------------------------------------------------------------
# Cargo Router
# ---------------------------------------------------------------------------
cargo_router = APIRouter(prefix="/cargos", tags=["cargos"])


@cargo_router.post("", status_code=201, response_model=TrackingIdResponse)
async def book_cargo(
    body: BookCargoRequest,
    service: BookingService = Depends(get_booking_service),
) -> TrackingIdResponse:
    tracking_id = service.book_new_cargo(
        origin=body.origin,
        destination=body.destination,
        arrival_deadline=body.arrival_deadline,
    )
    return TrackingIdResponse(tracking_id=tracking_id)


@cargo_router.get("", response_model=list[CargoView])
async def list_cargos(service: BookingService = Depends(get_booking_service)) -> list[CargoView]:
    return service.cargos()


@cargo_router.get("/{tracking_id}", response_model=CargoView)
async def track_cargo(
    tracking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> CargoView:
    return service.track(tracking_id)


@cargo_router.get("/{tracking_id}/routes", response_model=list[RouteCandidateSchema])
async def request_routes(
    tracking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> list[RouteCandidateSchema]:
    return [_to_schema(itinerary) for itinerary in service.request_possible_routes_for_cargo(tracking_id)]


@cargo_router.put("/{tracking_id}/route", response_model=StatusResponse)
async def assign_route(
    tracking_id: str,
    body: AssignRouteRequest,
    service: BookingService = Depends(get_booking_service),
) -> StatusResponse:
    itinerary = itinerary_from_json([leg.model_dump() for leg in body.legs])
    service.assign_cargo_to_route(tracking_id, itinerary)
    return StatusResponse()


@cargo_router.put("/{tracking_id}/destination", response_model=StatusResponse)
async def change_destination(
    tracking_id: str,
    body: ChangeDestinationRequest,
    service: BookingService = Depends(get_booking_service),
) -> StatusResponse:
    service.change_destination(tracking_id, body.destination)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Location Router
# ---------------------------------------------------------------------------
location_router = APIRouter(prefix="/locations", tags=["locations"])


@location_router.get("", response_model=list[LocationResponse])
async def list_locations(service: BookingService = Depends(get_booking_service)) -> list[LocationResponse]:
    return [LocationResponse(un_locode=location.un_locode, name=location.name) for location in service.locations()]


# ---------------------------------------------------------------------------
# Handling Router
# ---------------------------------------------------------------------------
handling_router = APIRouter(prefix="/handling-events", tags=["handling"])


@handling_router.post("", status_code=201, response_model=HandlingEventIdResponse)
async def register_handling_event(
    body: RegisterHandlingEventRequest,
    service: BookingService = Depends(get_booking_service),
) -> HandlingEventIdResponse:
    handling_event_id = service.register_handling_event(
        tracking_id=body.tracking_id,
        activity_type=body.activity_type.value,
        location=body.location,
        completion_time=body.completion_time,
        voyage_number=body.voyage_number,
    )
    return HandlingEventIdResponse(handling_event_id=handling_event_id)
