from io import BytesIO

from flask import Blueprint, Response, render_template, request
from flask_login import current_user, login_required

from swellshare.services import PaymentService

web_receipt_bp = Blueprint("web_receipt", __name__)


@web_receipt_bp.get("/receipt/<transaction_id>")
@login_required
def receipt_page(transaction_id):
    payment = PaymentService.get_for_viewer(transaction_id, current_user)
    rental = payment.rental
    board = rental.surfboard

    pdf_error = None
    if request.args.get("format") == "pdf":
        try:
            return _pdf_receipt_response(payment, rental, board)
        except ModuleNotFoundError:
            pdf_error = "PDF export is unavailable: install reportlab in your environment."

    return render_template(
        "receipt.html",
        payment=payment,
        rental=rental,
        board=board,
        renter_email=payment.user.email,
        pdf_error=pdf_error,
    )


def _pdf_receipt_response(payment, rental, board):
    from reportlab.lib.pagesizes import A4
    from reportlab.pdfgen import canvas

    buffer = BytesIO()
    p = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    y = height - 60
    p.setFont("Helvetica-Bold", 22)
    p.drawString(50, y, "SwellShare Receipt")

    y -= 36
    p.setFont("Helvetica", 12)
    lines = [
        f"Transaction: {payment.transaction_id}",
        f"Date: {payment.created_at.strftime('%Y-%m-%d %H:%M')}",
        f"Surfboard: {board.title}",
        f"Renter: {payment.user.email}",
        f"Dates: {rental.start_date.isoformat()} to {rental.end_date.isoformat()} ({rental.days} days)",
        f"Rental amount: ${payment.amount}",
        f"Service fee: ${payment.service_fee}",
        f"Platform fee: ${payment.platform_fee}",
        f"Total: ${payment.total_amount}",
        f"Status: {payment.status.title()}",
    ]

    for line in lines:
        p.drawString(50, y, line)
        y -= 24

    p.showPage()
    p.save()
    buffer.seek(0)

    return Response(
        buffer.getvalue(),
        mimetype="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={payment.transaction_id}.pdf"},
    )
