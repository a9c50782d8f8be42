"""
Sample Data

Records written to an empty store on first use, so a fresh installation
has something to list. Every sample carries the same placeholder receipt:
a minimal single-page PDF.
"""

from datetime import datetime, timezone

from reimbursements.models.reimbursement import Reimbursement, ReimbursementCategory
from reimbursements.receipts.encoding import encode_data_url


PLACEHOLDER_PDF = b"""%PDF-1.4
1 0 obj
<<
/Type /Catalog
/Pages 2 0 R
>>
endobj
2 0 obj
<<
/Type /Pages
/Kids [3 0 R]
/Count 1
>>
endobj
3 0 obj
<<
/Type /Page
/Parent 2 0 R
/Resources <<
/Font <<
/F1 4 0 R
>>
>>
/MediaBox [0 0 612 792]
/Contents 5 0 R
>>
endobj
4 0 obj
<<
/Type /Font
/Subtype /Type1
/BaseFont /Helvetica
>>
endobj
5 0 obj
<<
/Length 44
>>
stream
BT
/F1 12 Tf
100 700 Td
(Comprovante de Reembolso) Tj
ET
endstream
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000262 00000 n
0000000341 00000 n
trailer
<<
/Size 6
/Root 1 0 R
>>
startxref
433
%%EOF"""

# (id, name, category, amount, receipt name, creation day in January 2024)
_SAMPLES = [
    ("1", "Rodrigo", ReimbursementCategory.FOOD, 34.78, "recibo-alimentacao.pdf", 15),
    ("2", "Tamires", ReimbursementCategory.LODGING, 1200.00, "recibo-hospedagem.pdf", 14),
    ("3", "Lara", ReimbursementCategory.FOOD, 12.35, "recibo-lanche.pdf", 13),
    ("4", "Elias", ReimbursementCategory.TRANSPORT, 47.65, "recibo-uber.pdf", 12),
    ("5", "Thiago", ReimbursementCategory.SERVICES, 99.90, "recibo-servico.pdf", 11),
    ("6", "Vinicius", ReimbursementCategory.OTHER, 25.89, "recibo-outros.pdf", 10),
]


def placeholder_receipt() -> str:
    """The placeholder PDF as a data URL."""
    return encode_data_url(PLACEHOLDER_PDF, "application/pdf")


def generate_sample_data() -> list[Reimbursement]:
    """Build the six sample reimbursements, newest first."""
    receipt = placeholder_receipt()
    return [
        Reimbursement(
            id=record_id,
            name=name,
            category=category,
            amount=amount,
            receipt=receipt,
            receipt_name=receipt_name,
            created_at=datetime(2024, 1, day, tzinfo=timezone.utc),
        )
        for record_id, name, category, amount, receipt_name, day in _SAMPLES
    ]
