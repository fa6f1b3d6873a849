from sri_ats.models.ats import ATSGeneratorOptions
from sri_ats.models.sri_document import Retenciones
from sri_ats.modules.ats.aggregator import (
    aggregate_compras_by_proveedor,
    collation_key,
    create_ats_report,
    infer_periodo,
    sum_compras_totals,
    sum_ventas_totals,
)
from sri_ats.modules.ats.constants import ATSReportTypes, TransactionTypes
from sri_ats.modules.ats.detector import (
    classify_documents,
    detect_transaction_type,
    infer_contribuyente_ruc,
    separate_by_transaction_type,
)
from sri_ats.modules.ats.mapper import (
    get_codigo_comprobante,
    get_numero_documento,
    map_to_compras_row,
    map_to_ventas_row,
)
from sri_ats.utils.date_utils import current_period

from sri_samples import CLIENTE_RUC, EMISOR_RUC, make_document


# =====================================================
# CLASIFICACIÓN
# =====================================================

def test_lote_de_un_solo_emisor_son_ventas():
    documents = [
        make_document(receptor_id="0990000000001", receptor_razon="Cliente A"),
        make_document(receptor_id="0991111111001", receptor_razon="Cliente B", secuencial="000000124"),
        make_document(receptor_id="0992222222001", receptor_razon="Cliente C", secuencial="000000125"),
    ]

    assert infer_contribuyente_ruc(documents) == EMISOR_RUC

    classified = classify_documents(documents)
    assert [c.transaction_type for c in classified] == [TransactionTypes.VENTA] * 3

    report = create_ats_report(documents)
    assert report.tipo == ATSReportTypes.VENTAS
    assert report.compras is None
    assert report.ventas.resumen.total_comprobantes == 3


def test_inferencia_usa_receptor_mas_frecuente_con_ruc_valido():
    documents = [
        make_document(emisor_ruc="1791234567001", receptor_id="0912345678", receptor_tipo="05"),
        make_document(emisor_ruc="1797654321001", receptor_id="0912345678", receptor_tipo="05"),
        make_document(emisor_ruc="1798888888001", receptor_id=CLIENTE_RUC),
    ]

    assert infer_contribuyente_ruc(documents) == CLIENTE_RUC


def test_inferencia_empate_gana_el_primero():
    documents = [
        make_document(emisor_ruc="1791234567001", receptor_id="0993333333001"),
        make_document(emisor_ruc="1797654321001", receptor_id="0994444444001"),
    ]

    assert infer_contribuyente_ruc(documents) == "0993333333001"


def test_inferencia_sin_documentos_o_sin_ruc():
    assert infer_contribuyente_ruc([]) is None

    documents = [
        make_document(emisor_ruc="1791234567001", receptor_id="0912345678", receptor_tipo="05"),
        make_document(emisor_ruc="1797654321001", receptor_id="0923456789", receptor_tipo="05"),
    ]
    assert infer_contribuyente_ruc(documents) is None

    classified = classify_documents(documents)
    assert all(c.transaction_type == TransactionTypes.COMPRA for c in classified)


def test_detect_transaction_type():
    doc = make_document(emisor_ruc=EMISOR_RUC, receptor_id=CLIENTE_RUC)

    assert detect_transaction_type(doc, EMISOR_RUC) == TransactionTypes.VENTA
    assert detect_transaction_type(doc, CLIENTE_RUC) == TransactionTypes.COMPRA
    assert detect_transaction_type(doc, "1799999999001") == TransactionTypes.COMPRA


def test_separar_por_tipo_preserva_orden():
    venta = make_document(emisor_ruc=CLIENTE_RUC, receptor_id="1791234567001")
    compra_1 = make_document(emisor_ruc="1791234567001", receptor_id=CLIENTE_RUC)
    compra_2 = make_document(emisor_ruc="1797654321001", receptor_id=CLIENTE_RUC)

    compras, ventas = separate_by_transaction_type(
        classify_documents([compra_1, venta, compra_2], CLIENTE_RUC)
    )

    assert compras == [compra_1, compra_2]
    assert ventas == [venta]


# =====================================================
# FILAS
# =====================================================

def test_fila_de_compra_usa_emisor_y_retenciones():
    doc = make_document(
        tipo="retencion",
        emisor_razon="Agente Retención",
        subtotal=10000, iva12=0, iva=0, total=800,
        retenciones=Retenciones(iva=300, renta=500),
        forma_pago=None,
    )

    row = map_to_compras_row(doc)

    assert row.tipo_identificacion == "04"
    assert row.identificacion == EMISOR_RUC
    assert row.razon_social == "Agente Retención"
    assert row.codigo_comprobante == "07"
    assert row.retencion_iva == 300
    assert row.retencion_renta == 500
    assert row.base_no_objeto_iva == 10000
    assert row.forma_pago is None


def test_fila_de_venta_usa_receptor():
    row = map_to_ventas_row(make_document(receptor_tipo="05", receptor_id="0912345678", receptor_razon="Juan Pérez"))

    assert row.tipo_identificacion == "05"
    assert row.identificacion == "0912345678"
    assert row.razon_social == "Juan Pérez"
    assert row.codigo_comprobante == "01"
    assert row.fecha_emision == "2024-01-15"


def test_numeracion_desde_clave_de_acceso():
    row = map_to_compras_row(make_document(secuencial="000000987"))

    assert (row.establecimiento, row.punto_emision, row.secuencial) == ("001", "002", "000000987")
    assert get_numero_documento(row) == "001-002-000000987"


def test_numeracion_por_defecto_si_la_clave_no_es_valida():
    doc = make_document().model_copy(update={"clave_acceso": "123"})

    row = map_to_ventas_row(doc)

    assert get_numero_documento(row) == "000-000-000000000"
    assert row.clave_acceso == "123"


def test_base_no_objeto_nunca_es_negativa():
    remanente = map_to_compras_row(make_document(subtotal=10000, iva12=6000, iva0=3000))
    excedido = map_to_compras_row(make_document(subtotal=10000, iva12=8000, iva0=5000))

    assert remanente.base_no_objeto_iva == 1000
    assert remanente.base_iva_gravada == 6000
    assert excedido.base_no_objeto_iva == 0


def test_base_gravada_suma_tarifas_12_y_15():
    row = map_to_ventas_row(make_document(subtotal=30000, iva12=10000, iva15=20000, iva=4200))

    assert row.base_iva_gravada == 30000
    assert row.monto_iva == 4200


def test_codigo_comprobante():
    assert get_codigo_comprobante("nota_credito") == "04"
    assert get_codigo_comprobante("guia_remision") == "06"
    assert get_codigo_comprobante("desconocido") == "01"


# =====================================================
# AGREGACIÓN
# =====================================================

def test_totales_de_compras_son_la_suma_de_las_filas(compras_documents):
    report = create_ats_report(compras_documents, ATSGeneratorOptions(contribuyente_ruc=CLIENTE_RUC))

    compras = report.compras
    assert report.tipo == ATSReportTypes.COMPRAS
    assert report.ventas is None
    assert compras.resumen.total_comprobantes == 2
    assert compras.resumen.por_tipo == {"factura": 2}
    assert compras.resumen.totales.total == sum(row.total for row in compras.filas) == 16200
    assert compras.resumen.totales.base_iva_gravada == 10000
    assert compras.resumen.totales.base_iva0 == 5000
    assert compras.resumen.totales.monto_iva == 1200
    assert len(compras.por_proveedor) == 2


def test_agrupacion_por_proveedor_ordenada_sin_tildes():
    rows = [
        map_to_compras_row(make_document(emisor_ruc="1791111111001", emisor_razon="Zeta S.A.")),
        map_to_compras_row(make_document(emisor_ruc="1792222222001", emisor_razon="Ávila Hnos.")),
        map_to_compras_row(make_document(emisor_ruc="1793333333001", emisor_razon="avícola beta")),
        map_to_compras_row(make_document(emisor_ruc="1791111111001", emisor_razon="Zeta S.A.", total=500)),
    ]

    agrupado = aggregate_compras_by_proveedor(rows)

    assert [a.proveedor.razon_social for a in agrupado] == ["avícola beta", "Ávila Hnos.", "Zeta S.A."]
    zeta = agrupado[2]
    assert zeta.numero_comprobantes == 2
    assert zeta.totales.total == 11200 + 500
    assert len(zeta.comprobantes) == 2

    total_grupos = sum(a.totales.total for a in agrupado)
    assert total_grupos == sum_compras_totals(rows).total


def _sumar_campos(a, b):
    return {name: value + b[name] for name, value in a.items()}


def test_totales_de_compras_son_aditivos_campo_por_campo():
    rows = [
        map_to_compras_row(make_document()),
        map_to_compras_row(make_document(
            tipo="retencion", subtotal=5000, iva12=0, iva=0, total=800,
            retenciones=Retenciones(iva=300, renta=500),
        )),
        map_to_compras_row(make_document(subtotal=20000, iva12=0, iva15=20000, iva=3000, ice=500, total=23500)),
        map_to_compras_row(make_document(subtotal=1000, iva12=0, iva0=1000, iva=0, total=1000)),
    ]

    for corte in range(len(rows) + 1):
        izquierda = sum_compras_totals(rows[:corte]).model_dump()
        derecha = sum_compras_totals(rows[corte:]).model_dump()

        assert _sumar_campos(izquierda, derecha) == sum_compras_totals(rows).model_dump()


def test_totales_de_ventas_son_aditivos_campo_por_campo():
    rows = [
        map_to_ventas_row(make_document(emisor_ruc=CLIENTE_RUC, receptor_id="0912345678", receptor_tipo="05")),
        map_to_ventas_row(make_document(
            emisor_ruc=CLIENTE_RUC, subtotal=20000, iva12=0, iva15=20000, iva=3000, ice=500, total=23500
        )),
        map_to_ventas_row(make_document(emisor_ruc=CLIENTE_RUC, subtotal=1500, iva12=0, iva0=1000, iva=0, total=1500)),
    ]

    for corte in range(len(rows) + 1):
        izquierda = sum_ventas_totals(rows[:corte]).model_dump()
        derecha = sum_ventas_totals(rows[corte:]).model_dump()

        assert _sumar_campos(izquierda, derecha) == sum_ventas_totals(rows).model_dump()


def test_collation_key_ignora_tildes_y_mayusculas():
    assert collation_key("Ávila")[0] == collation_key("avila")[0]
    assert collation_key("")[0] == ""


def test_reporte_completo_con_ruc_explicito():
    documents = [
        make_document(emisor_ruc=CLIENTE_RUC, receptor_id="1791234567001", receptor_razon="Cliente X"),
        make_document(emisor_ruc="1791234567001", receptor_id=CLIENTE_RUC),
    ]

    report = create_ats_report(documents, ATSGeneratorOptions(contribuyente_ruc=CLIENTE_RUC, periodo="2023-12"))

    assert report.tipo == ATSReportTypes.COMPLETO
    assert report.periodo == "2023-12"
    assert report.compras.resumen.total_comprobantes == 1
    assert report.ventas.resumen.total_comprobantes == 1
    assert report.ventas.por_cliente[0].cliente.razon_social == "Cliente X"
    assert report.generado_en.endswith("Z")


def test_periodo_mas_frecuente_y_desempate():
    documents = [
        make_document(fecha="2024-01-10"),
        make_document(fecha="2024-02-05"),
        make_document(fecha="2024-02-07"),
        make_document(fecha="2024-01-20"),
    ]
    assert infer_periodo(documents) == "2024-01"

    documents.append(make_document(fecha="2024-02-28"))
    assert infer_periodo(documents) == "2024-02"


def test_reporte_sin_documentos():
    report = create_ats_report([])

    assert report.tipo == ATSReportTypes.COMPLETO
    assert report.compras is None
    assert report.ventas is None
    assert report.periodo == current_period()
