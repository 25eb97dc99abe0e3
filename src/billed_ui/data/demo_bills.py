"""Bills used by the demo store."""

from billed_ui.models.bill import Bill

DEMO_EMAIL = "employee@test.tld"

DEMO_BILLS: tuple[Bill, ...] = (
    Bill(
        id="47qAXb6fIm2zOKkLzMro",
        type="Hôtel et logement",
        name="encore",
        amount=400,
        date="2004-04-04",
        vat="80",
        pct=20,
        commentary="séminaire billed",
        file_url="https://test.storage.tld/v0/b/billable-677b6.appspot.com/preview-facture-free-201801-pdf-1.jpg",
        file_name="preview-facture-free-201801-pdf-1.jpg",
        status="pending",
        email=DEMO_EMAIL,
    ),
    Bill(
        id="BeKy5Mo4jkmdfPGYpTxZ",
        type="Transports",
        name="test1",
        amount=100,
        date="2001-01-01",
        vat="",
        pct=20,
        commentary="plop",
        file_url="https://test.storage.tld/v0/b/billable-677b6.appspot.com/0/receipt.jpg",
        file_name="1592770761.jpeg",
        status="refused",
        email=DEMO_EMAIL,
        comment_admin="en fait non",
    ),
    Bill(
        id="UIUZtnPQvnbFnB0ozvJh",
        type="Services en ligne",
        name="test3",
        amount=300,
        date="2003-03-03",
        vat="60",
        pct=20,
        commentary="",
        file_url="https://test.storage.tld/v0/b/billable-677b6.appspot.com/facturefreemobile.jpg",
        file_name="facture-client-php-exportee-dans-document-pdf-enregistre-sur-disque-dur.png",
        status="accepted",
        email=DEMO_EMAIL,
        comment_admin="bon bah d'accord",
    ),
    Bill(
        id="qcCK3SzECmaZAGRrHjaC",
        type="Restaurants et bars",
        name="test2",
        amount=200,
        date="2002-02-02",
        vat="40",
        pct=20,
        commentary="test2",
        file_url=None,
        file_name=None,
        status="refused",
        email=DEMO_EMAIL,
        comment_admin="pas la bonne facture",
    ),
)
