from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from typing import Dict, Any
from ..database import get_db
from ..models.user import User
from ..services.request_service import RequestService
from ..services.ticket_service import TicketService
from ..services.user_service import UserService
from ..schemas.feedback import FeedbackCreate, FeedbackResponse
from ..schemas.requests import RequestSubmitted
from ..schemas.ticket import (
    BankPaymentRequest,
    PaymentResponse,
    PaymentSimulate,
    TicketRegister,
    TicketResponse,
    TicketTransfer,
)
from ..schemas.user import UserProfileUpdate, UserRegister, UserRequestCreate, UserResponse
from ..utils.bank_gateway import BankGatewayClient
from ..utils.router_helpers import handle_service_errors, RouterResponse
from ..dependencies.permissions import get_bank_gateway, require_user

router = APIRouter(tags=["users"])


@router.post("/register", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def register_user(user_data: UserRegister, db: Session = Depends(get_db)):
    """Create an account that can sign in immediately"""
    user = UserService(db).register_user(user_data)

    return RouterResponse.created(
        data=UserResponse.model_validate(user),
        message="User registered successfully",
    )


@router.post("/requests", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def submit_user_request(
    request_data: UserRequestCreate, db: Session = Depends(get_db)
):
    """Ask for an account that an admin must approve first"""
    request = RequestService(db).submit_user_request(request_data)

    return RouterResponse.created(
        data=RequestSubmitted(
            request_id=request.request_id,
            tracking_token=request.tracking_token,
            status=request.status,
            submitted_at=request.created_at,
        ),
        message="Registration request submitted successfully",
    )


@router.put("/profile", response_model=Dict[str, Any])
@handle_service_errors
async def update_profile(
    updates: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
):
    user = UserService(db).update_profile(current_user.user_id, updates)

    return RouterResponse.updated(
        data=UserResponse.model_validate(user), message="Profile updated successfully"
    )


@router.get("/registered-events", response_model=Dict[str, Any])
@handle_service_errors
async def get_registered_events(
    db: Session = Depends(get_db), current_user: User = Depends(require_user)
):
    """One entry per ticket held, with the event it admits to"""
    events = TicketService(db).get_registered_events(current_user.user_id)
    return RouterResponse.success(data=events)


@router.get("/tickets", response_model=Dict[str, Any])
@handle_service_errors
async def get_tickets(
    db: Session = Depends(get_db), current_user: User = Depends(require_user)
):
    tickets = TicketService(db).get_user_tickets(current_user.user_id)
    return RouterResponse.success(data=tickets)


@router.post("/tickets/transfer", response_model=Dict[str, Any])
@handle_service_errors
async def transfer_ticket(
    transfer: TicketTransfer,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
):
    """Hand one of the caller's tickets to another user by email"""
    ticket = TicketService(db).transfer_ticket(
        user_id=current_user.user_id,
        ticket_id=transfer.ticket_id,
        recipient_email=transfer.recipient_email,
        reason=transfer.reason,
    )

    return RouterResponse.success(
        data=TicketResponse.model_validate(ticket),
        message="Ticket transferred successfully",
    )


@router.post(
    "/events/register", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED
)
@handle_service_errors
async def register_for_event(
    registration: TicketRegister,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
):
    ticket = TicketService(db).register_for_event(
        user_id=current_user.user_id,
        event_id=registration.event_id,
        ticket_quantity=registration.ticket_quantity,
        ticket_type=registration.ticket_type,
    )

    return RouterResponse.created(
        data=TicketResponse.model_validate(ticket), message="Registration successful"
    )


@router.post("/payments/simulate", response_model=Dict[str, Any])
@handle_service_errors
async def simulate_payment(
    payment_data: PaymentSimulate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
):
    """Mark a ticket Paid without contacting any payment provider"""
    payment = TicketService(db).simulate_payment(
        current_user.user_id, payment_data.ticket_id
    )

    return RouterResponse.success(
        data=PaymentResponse.model_validate(payment),
        message="Payment processed successfully",
    )


@router.post("/payments/bank", response_model=Dict[str, Any])
@handle_service_errors
async def pay_by_bank(
    payment_data: BankPaymentRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
    gateway: BankGatewayClient = Depends(get_bank_gateway),
):
    """Charge a ticket through the external bank transfer API"""
    # Blocking bank call runs off the event loop
    payment, bank_message = await run_in_threadpool(
        TicketService(db).pay_by_bank,
        user_id=current_user.user_id,
        ticket_id=payment_data.ticket_id,
        from_account=payment_data.from_account_number,
        gateway=gateway,
    )

    return RouterResponse.success(
        data=PaymentResponse.model_validate(payment), message=bank_message
    )


@router.post(
    "/events/{event_id}/feedback",
    response_model=Dict[str, Any],
    status_code=status.HTTP_201_CREATED,
)
@handle_service_errors
async def leave_feedback(
    event_id: int,
    feedback_data: FeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_user),
):
    feedback = TicketService(db).add_feedback(
        current_user.user_id, event_id, feedback_data
    )

    return RouterResponse.created(
        data=FeedbackResponse.from_feedback(feedback),
        message="Feedback submitted successfully",
    )
