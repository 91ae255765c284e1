def _money(value):
    return None if value is None else str(value)


def _iso(value):
    return None if value is None else value.isoformat()


def agent_to_dict(agent):
    return {
        "id": agent.id,
        "name": agent.name,
        "email": agent.email,
        "phone": agent.phone,
        "agency": agent.agency,
        "agency_phone": agent.agency_phone,
        "agency_email": agent.agency_email,
        "role": agent.role,
        "is_active": agent.is_active_agent,
    }


def property_to_dict(listing):
    return {
        "id": listing.id,
        "agent_id": listing.agent_id,
        "listing_type": listing.listing_type,
        "title": listing.title,
        "description": listing.description,
        "location": listing.location,
        "property_type": listing.property_type,
        "price": _money(listing.price),
        "price_type": listing.price_type,
        "beds": listing.beds,
        "baths": listing.baths,
        "sqm": listing.sqm,
        "amenities": list(listing.amenities or []),
        "images": list(listing.images or []),
        "status": listing.status,
        "license_number": listing.license_number,
        "created_at": _iso(listing.created_at),
    }


def availability_to_dict(record):
    return {
        "id": record.id,
        "property_id": record.property_id,
        "booking_id": record.booking_id,
        "start_date": _iso(record.start_date),
        "end_date": _iso(record.end_date),
        "is_available": record.is_available,
        "notes": record.notes,
    }


def commission_to_dict(commission):
    return {
        "id": commission.id,
        "booking_id": commission.booking_id,
        "owner_agent_id": commission.owner_agent_id,
        "booking_agent_id": commission.booking_agent_id,
        "total_amount": _money(commission.total_amount),
        "owner_commission": _money(commission.owner_commission),
        "booking_commission": _money(commission.booking_commission),
        "platform_fee": _money(commission.platform_fee),
        "commission_rate": _money(commission.commission_rate),
        "status": commission.status,
        "created_at": _iso(commission.created_at),
    }


def booking_to_dict(booking, with_commission=False):
    data = {
        "id": booking.id,
        "property_id": booking.property_id,
        "owner_agent_id": booking.owner_agent_id,
        "booking_agent_id": booking.booking_agent_id,
        "client_name": booking.client_name,
        "client_email": booking.client_email,
        "client_phone": booking.client_phone,
        "check_in": _iso(booking.check_in),
        "check_out": _iso(booking.check_out),
        "total_amount": _money(booking.total_amount),
        "status": booking.status,
        "confirmed_at": _iso(booking.confirmed_at),
        "cancelled_at": _iso(booking.cancelled_at),
        "paid_at": _iso(booking.paid_at),
        "archived_at": _iso(booking.archived_at),
        "created_at": _iso(booking.created_at),
    }
    if with_commission:
        data["commission"] = commission_to_dict(booking.commission) if booking.commission else None
    return data


def money_summary(summary):
    return {key: (value if isinstance(value, int) else _money(value)) for key, value in summary.items()}
