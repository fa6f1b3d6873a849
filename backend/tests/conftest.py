import pytest

from sri_samples import CLIENTE_RUC, build_factura, make_document, wrap_in_envelope


@pytest.fixture
def factura_xml():
    return build_factura()


@pytest.fixture
def factura_autorizada():
    return wrap_in_envelope(build_factura())


@pytest.fixture
def compras_documents():
    """Dos facturas de proveedores distintos recibidas por el contribuyente."""
    return [
        make_document(emisor_ruc="1791234567001", emisor_razon="Proveedor Uno", receptor_id=CLIENTE_RUC),
        make_document(
            emisor_ruc="1797654321001", emisor_razon="Proveedor Dos", receptor_id=CLIENTE_RUC,
            secuencial="000000456", subtotal=5000, iva12=0, iva0=5000, iva=0, total=5000,
        ),
    ]
