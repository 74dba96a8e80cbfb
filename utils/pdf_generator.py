from io import BytesIO
from decimal import Decimal
from typing import Dict
from reportlab.pdfgen import canvas
from reportlab.lib.units import inch
from schemas.billing import BillInDB
from services.exceptions import RestaurantError
import logging

logger = logging.getLogger(__name__)

UNKNOWN_ITEM_NAME = "Unknown Item"


def generate_receipt_pdf(bill: BillInDB, item_names: Dict[str, str], tax_rate: Decimal) -> BytesIO:
    """
    Render a receipt-style bill (4" wide) for thermal printers.
    Item names come from the menu at print time; amounts come from the bill snapshot.
    """
    buffer = BytesIO()
    receipt_width = 4 * inch
    receipt_height = max(6 * inch, (4.5 + 0.2 * len(bill.items)) * inch)
    c = canvas.Canvas(buffer, pagesize=(receipt_width, receipt_height))

    try:
        margin = 0.2 * inch
        y_pos = receipt_height - margin

        # Business Header
        c.setFont("Helvetica-Bold", 14)
        c.drawCentredString(receipt_width / 2, y_pos, "Restaurant Receipt")
        y_pos -= 0.25 * inch

        # Bill Details
        c.setFont("Helvetica-Bold", 9)
        c.drawString(margin, y_pos, f"Bill No: {bill.id}")
        c.drawRightString(receipt_width - margin, y_pos, f"Table: {bill.table_number}")
        y_pos -= 0.15 * inch
        c.setFont("Helvetica", 8)
        c.drawString(margin, y_pos, f"Order: {bill.order_id}")
        c.drawRightString(receipt_width - margin, y_pos, bill.created_at.strftime('%d-%m-%Y %H:%M UTC'))
        y_pos -= 0.2 * inch

        # Item Header
        c.setFont("Helvetica-Bold", 8)
        c.drawString(margin, y_pos, "DESCRIPTION")
        c.drawCentredString(receipt_width / 2, y_pos, "QTY")
        c.drawRightString(receipt_width - margin, y_pos, "AMOUNT")
        y_pos -= 0.15 * inch
        c.line(margin, y_pos, receipt_width - margin, y_pos)
        y_pos -= 0.15 * inch

        # Items List
        c.setFont("Helvetica", 8)
        for item in bill.items:
            item_name = item_names.get(item.menu_item_id, UNKNOWN_ITEM_NAME)
            if len(item_name) > 25:
                item_name = item_name[:22] + "..."
            amount = item.price * item.quantity
            c.drawString(margin + 0.1 * inch, y_pos, item_name)
            c.drawCentredString(receipt_width / 2, y_pos, str(item.quantity))
            c.drawRightString(receipt_width - margin - 0.1 * inch, y_pos, f"{amount:.2f}")
            y_pos -= 0.2 * inch

        # Totals
        c.line(margin, y_pos, receipt_width - margin, y_pos)
        y_pos -= 0.15 * inch
        c.drawString(margin, y_pos, "Subtotal:")
        c.drawRightString(receipt_width - margin, y_pos, f"{bill.subtotal:.2f}")
        y_pos -= 0.15 * inch
        c.drawString(margin, y_pos, f"Tax ({tax_rate * 100:.1f}%):")
        c.drawRightString(receipt_width - margin, y_pos, f"{bill.tax:.2f}")
        y_pos -= 0.15 * inch
        c.setFont("Helvetica-Bold", 9)
        c.drawString(margin, y_pos, "NET TOTAL:")
        c.drawRightString(receipt_width - margin, y_pos, f"{bill.total:.2f}")
        y_pos -= 0.25 * inch

        # Payment Info
        c.setFont("Helvetica", 8)
        c.drawString(
            margin, y_pos,
            f"Payment Method: {bill.payment_method.value}  Status: {bill.payment_status.value}",
        )
        y_pos -= 0.15 * inch

        # Footer
        c.line(margin, y_pos, receipt_width - margin, y_pos)
        y_pos -= 0.15 * inch
        c.drawCentredString(receipt_width / 2, y_pos, "Thank you for your visit!")

        c.showPage()
        c.save()
        buffer.seek(0)
        return buffer

    except Exception as e:
        logger.error(f"Error generating receipt PDF for bill {bill.id}: {str(e)}")
        raise RestaurantError(f"Failed to generate receipt PDF: {str(e)}") from e
