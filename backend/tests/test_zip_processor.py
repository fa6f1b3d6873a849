import base64
import io
import zipfile

import pytest

from sri_ats.modules.zip_processor.errors import ZipErrorCodes
from sri_ats.modules.zip_processor.extractor import extract_xmls_from_zip
from sri_ats.modules.zip_processor.processor import process_zip_file, process_zip_file_from_base64

from sri_samples import build_factura, build_retencion, wrap_in_envelope


def make_zip(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries:
            zf.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def mixed_zip():
    return make_zip([
        ("facturas/", ""),
        ("facturas/F001.xml", wrap_in_envelope(build_factura())),
        ("leeme.txt", "no es un comprobante"),
        ("R001.XML", build_retencion()),
        ("roto.xml", "<factura><infoTributaria></factura>"),
        ("latin1.xml", b"<factura>\xff</factura>"),
    ])


def test_extraccion_filtra_xml_y_reporta_decodificacion(mixed_zip):
    result = extract_xmls_from_zip(mixed_zip)

    assert result.is_success()
    extraction = result.value
    assert [f.filename for f in extraction.files] == ["facturas/F001.xml", "R001.XML", "roto.xml"]
    assert extraction.skipped == ["facturas/", "leeme.txt"]
    assert [e.code for e in extraction.errors] == [ZipErrorCodes.EXTRACTION_FAILED]
    assert extraction.errors[0].filename == "latin1.xml"


def test_extraccion_descarta_bom():
    data = make_zip([("a.xml", b"\xef\xbb\xbf<factura/>")])

    extraction = extract_xmls_from_zip(data).value

    assert extraction.files[0].content == "<factura/>"
    assert extraction.files[0].size == 13


def test_extraccion_de_entradas_invalidas():
    assert extract_xmls_from_zip(b"").code == ZipErrorCodes.EMPTY_ZIP
    assert extract_xmls_from_zip(b"hola mundo").code == ZipErrorCodes.INVALID_ZIP

    corrupto = extract_xmls_from_zip(b"PK\x03\x04basura")
    assert corrupto.code == ZipErrorCodes.INVALID_ZIP
    assert corrupto.error.startswith("Error al descomprimir ZIP")


def test_extraccion_sin_xml():
    result = extract_xmls_from_zip(make_zip([("a.txt", "x"), ("b.pdf", "y")]))

    assert result.is_failure()
    assert result.code == ZipErrorCodes.NO_XML_FILES
    assert result.details["skipped"] == ["a.txt", "b.pdf"]


def test_procesamiento_de_zip_mixto(mixed_zip):
    result = process_zip_file(mixed_zip)

    assert result.total_files == 5
    assert result.xml_files == 3
    assert result.processed == 2
    assert result.failed == 1
    assert result.skipped == ["facturas/", "leeme.txt"]

    por_archivo = {r.filename: r.result for r in result.results}
    assert por_archivo["facturas/F001.xml"].document.valores.total == 11200
    assert por_archivo["R001.XML"].document.retenciones.renta == 500
    assert not por_archivo["roto.xml"].success

    mensajes = [e.message for e in result.errors]
    assert mensajes[0].startswith("Error al decodificar archivo latin1.xml")
    assert mensajes[1].startswith("Error al procesar roto.xml: ")
    assert all(e.code == ZipErrorCodes.EXTRACTION_FAILED for e in result.errors)


def test_procesamiento_de_zip_invalido():
    result = process_zip_file(make_zip([("a.txt", "x")]))

    assert result.processed == 0
    assert result.failed == 0
    assert result.total_files == 1
    assert [e.code for e in result.errors] == [ZipErrorCodes.NO_XML_FILES]


def test_procesamiento_desde_base64():
    data = make_zip([("F001.xml", build_factura())])

    result = process_zip_file_from_base64(base64.b64encode(data).decode("ascii"))
    assert result.processed == 1

    invalido = process_zip_file_from_base64("%%% no es base64 %%%")
    assert [e.code for e in invalido.errors] == [ZipErrorCodes.INVALID_ZIP]
