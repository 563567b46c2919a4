"""
Clause library
==============

Fixed legal text inserted verbatim by the document variants. Only ``$name``
placeholders are ever filled in, and only where a variant asks for it.
"""

from string import Template

from pydantic import BaseModel, ConfigDict


class Clause(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    body: str

    @property
    def heading(self) -> str:
        return f"{self.number}ª - {self.title}"


def interpolate(text, **values) -> str:
    """Fill ``$name`` placeholders, leaving unknown ones untouched."""
    return Template(text).safe_substitute(**values).strip()


# ─── CONTRATO DE COMPRAVENTA ───

PURCHASE_CLAUSES = (
    Clause(
        number=1,
        title="OBJETO DEL CONTRATO",
        body="El VENDEDOR transmite al COMPRADOR la propiedad del vehículo descrito en el presente "
             "contrato, libre de cargas y gravámenes, con todos los derechos y obligaciones "
             "inherentes al mismo.",
    ),
    Clause(
        number=2,
        title="PRECIO Y FORMA DE PAGO",
        body="El precio de la compraventa es el indicado en este contrato. El COMPRADOR abonará "
             "dicho importe según la forma de pago acordada. El VENDEDOR entregará factura "
             "correspondiente a la operación.",
    ),
    Clause(
        number=3,
        title="ENTREGA DEL VEHÍCULO",
        body="La entrega del vehículo se realizará en la fecha y lugar indicados en este contrato. "
             "El COMPRADOR deberá personarse para la recogida con su documentación identificativa "
             "en vigor. A partir de la entrega, los riesgos del vehículo serán por cuenta del "
             "COMPRADOR.",
    ),
    Clause(
        number=4,
        title="GARANTÍA",
        body="El VENDEDOR otorga garantía sobre el vehículo según las condiciones especificadas en "
             "este contrato. La garantía cubre los defectos de funcionamiento mecánico y eléctrico "
             "que se manifiesten durante el período de garantía, siempre que no sean causados por "
             "mal uso, accidente, o falta de mantenimiento. La garantía no cubre: piezas de desgaste "
             "normal (embrague, frenos, neumáticos, batería convencional, escobillas, filtros, "
             "aceites), elementos de carrocería, tapicería, cristales, ni averías derivadas de "
             "manipulaciones no autorizadas.",
    ),
    Clause(
        number=5,
        title="CONFORMIDAD Y ESTADO DEL VEHÍCULO",
        body="El COMPRADOR declara haber examinado el vehículo, comprobado su estado general, "
             "funcionamiento y documentación, manifestando su conformidad con el mismo. El "
             "COMPRADOR reconoce que adquiere un vehículo usado con el desgaste propio de su "
             "antigüedad y kilometraje.",
    ),
    Clause(
        number=6,
        title="PROCEDIMIENTO DE REPARACIÓN EN GARANTÍA",
        body="En caso de avería cubierta por la garantía, el COMPRADOR deberá comunicarlo "
             "inmediatamente al VENDEDOR antes de realizar cualquier reparación. El VENDEDOR "
             "designará el taller donde se efectuará la reparación. El incumplimiento de este "
             "procedimiento podrá suponer la pérdida de la garantía. El VENDEDOR no se "
             "responsabiliza de averías producidas por la continuación de uso del vehículo tras "
             "detectarse un fallo.",
    ),
    Clause(
        number=7,
        title="COMUNICACIÓN DE AVERÍAS",
        body="Toda comunicación de averías deberá realizarse por escrito (correo electrónico, SMS o "
             "mensajería instantánea) al VENDEDOR en un plazo máximo de 48 horas desde su "
             "detección. Deberá incluir descripción detallada del problema, fotografías si fuera "
             "posible, y el kilometraje actual del vehículo.",
    ),
    Clause(
        number=8,
        title="MODO DE REPARACIÓN",
        body="El VENDEDOR podrá optar entre reparar, sustituir la pieza afectada por una de igual o "
             "similar calidad, o en su caso, proceder a la devolución del importe correspondiente. "
             "En ningún caso el VENDEDOR estará obligado a sustituir piezas por otras nuevas de "
             "primer equipo si existen alternativas de calidad equivalente.",
    ),
    Clause(
        number=9,
        title="EXCLUSIONES DE GARANTÍA",
        body="Quedan expresamente excluidos de la garantía:\n"
             "a) Daños por accidente, negligencia, uso indebido o competición.\n"
             "b) Averías por falta de mantenimiento según especificaciones del fabricante.\n"
             "c) Manipulaciones o reparaciones realizadas por talleres no autorizados por el VENDEDOR.\n"
             "d) Daños por inundación, incendio, vandalismo o catástrofes naturales.\n"
             "e) Piezas de desgaste y consumibles.\n"
             "f) Defectos estéticos o de carrocería.\n"
             "g) Daños derivados del uso de combustibles o lubricantes inadecuados.",
    ),
    Clause(
        number=10,
        title="DOCUMENTACIÓN",
        body="El VENDEDOR entregará al COMPRADOR toda la documentación del vehículo en regla: "
             "Permiso de Circulación, Ficha Técnica, último recibo del Impuesto de Circulación "
             "pagado, contrato de compraventa firmado, y en su caso, llaves de repuesto y manuales "
             "del vehículo.",
    ),
    Clause(
        number=11,
        title="JURISDICCIÓN Y LEY APLICABLE",
        body="Para cualquier controversia derivada del presente contrato, ambas partes se someten "
             "expresamente a los Juzgados y Tribunales del domicilio del comprador, renunciando a "
             "cualquier otro fuero que pudiera corresponderles. El presente contrato se rige por la "
             "legislación española, en particular por el Real Decreto Legislativo 1/2007 por el que "
             "se aprueba el texto refundido de la Ley General para la Defensa de los Consumidores y "
             "Usuarios.",
    ),
)

SELLER_INTRO = "De una parte, como VENDEDOR:"
BUYER_INTRO = "De otra parte, como COMPRADOR:"

PURCHASE_RECITALS = """
Que el VENDEDOR es propietario del vehículo $vehicle que se describe a continuación, el cual se \
encuentra al corriente de pago de impuestos y libre de cargas, embargos y gravámenes.

Que el COMPRADOR está interesado en adquirir dicho vehículo, y ambas partes han acordado llevar a \
cabo la presente compraventa con arreglo a las siguientes:
"""

STIPULATIONS_TITLE = "ESTIPULACIONES"

PURCHASE_CLOSING = """
Y en prueba de conformidad con cuanto antecede, ambas partes firman el presente contrato por \
duplicado y a un solo efecto, en el lugar y fecha indicados.
"""

WARRANTY_TEXT = (
    "El vehículo objeto de este contrato cuenta con una garantía de $months meses o $mileage "
    "kilómetros (lo que antes se cumpla), a contar desde la fecha de entrega."
)

NO_WARRANTY_TEXT = (
    "El vehículo se vende sin garantía, habiendo sido debidamente informado el comprador de esta "
    "circunstancia."
)

ACCESSORY_LABELS = (
    ("spare_wheel", "Rueda de repuesto"),
    ("jack", "Gato y herramientas"),
    ("spare_keys", "Llaves de repuesto"),
    ("manuals", "Manuales del vehículo"),
)

DOCUMENTATION_LABELS = (
    ("inspection_card", "Ficha de Inspección Técnica"),
    ("circulation_permit", "Permiso de Circulación"),
    ("last_tax_receipt", "Último recibo del Impuesto de Circulación"),
)

# ─── CONTRATO DE SEÑAL ───

DEPOSIT_CLAUSES = (
    Clause(
        number=1,
        title="OBJETO DEL CONTRATO",
        body="El presente contrato tiene por objeto la reserva del vehículo descrito, mediante el "
             "pago de una señal a cuenta del precio total de compraventa. El VENDEDOR se compromete "
             "a no vender ni ofrecer el vehículo a terceros mientras esté vigente esta reserva.",
    ),
    Clause(
        number=2,
        title="IMPORTE DE LA SEÑAL",
        body="El COMPRADOR entrega en este acto la cantidad indicada como señal, que será "
             "descontada del precio total en el momento de formalizar la compraventa definitiva. "
             "Dicha cantidad ha sido abonada mediante transferencia bancaria / efectivo a la cuenta "
             "del VENDEDOR.",
    ),
    Clause(
        number=3,
        title="PLAZO DE VALIDEZ",
        body="La presente reserva tendrá validez hasta la fecha límite indicada en este contrato. Si "
             "llegada dicha fecha el COMPRADOR no ha formalizado la compra, el VENDEDOR quedará "
             "libre para vender el vehículo a terceros, procediéndose según lo estipulado en la "
             "cláusula siguiente.",
    ),
    Clause(
        number=4,
        title="PENALIZACIONES",
        body="Si el COMPRADOR desiste de la compra o no la formaliza en el plazo acordado sin causa "
             "justificada, perderá la totalidad de la señal entregada en concepto de indemnización "
             "por daños y perjuicios al VENDEDOR.\n\n"
             "Si el VENDEDOR incumple su obligación de reserva vendiendo el vehículo a un tercero, "
             "deberá devolver al COMPRADOR el doble de la cantidad entregada como señal.\n\n"
             "Se consideran causas justificadas de desistimiento sin penalización: la denegación de "
             "financiación cuando esta estuviera expresamente condicionada en el contrato, o "
             "defectos ocultos graves no manifestados previamente.",
    ),
    Clause(
        number=5,
        title="FORMALIZACIÓN DE LA COMPRAVENTA",
        body="Una vez abonado el importe restante hasta completar el precio total, se formalizará "
             "el contrato de compraventa definitivo, procediéndose a la entrega del vehículo y toda "
             "su documentación. El COMPRADOR dispondrá de un plazo de 5 días hábiles desde la "
             "comunicación de disponibilidad del vehículo para formalizar la operación.",
    ),
)

DEPOSIT_RECITALS = """
PRIMERO: Que el VENDEDOR es legítimo propietario del vehículo que se describe a continuación, \
encontrándose el mismo libre de cargas, gravámenes y al corriente de pago de todos los impuestos.

SEGUNDO: Que el COMPRADOR está interesado en la adquisición del citado vehículo y desea reservarlo \
mediante el pago de una señal.

TERCERO: Que ambas partes, reconociéndose mutuamente capacidad legal suficiente para contratar y \
obligarse, acuerdan formalizar el presente CONTRATO DE SEÑAL con arreglo a las siguientes:
"""

DEPOSIT_CLOSING = """
Y para que conste y en prueba de conformidad, ambas partes firman el presente documento por \
duplicado ejemplar y a un solo efecto, en el lugar y fecha arriba indicados.
"""

# ─── PROTECCIÓN DE DATOS ───

DATA_PROTECTION_NOTICE = """
CLÁUSULA DE PROTECCIÓN DE DATOS PERSONALES

De conformidad con lo establecido en el Reglamento (UE) 2016/679 del Parlamento Europeo y del \
Consejo, de 27 de abril de 2016 (RGPD), y la Ley Orgánica 3/2018, de 5 de diciembre, de Protección \
de Datos Personales y garantía de los derechos digitales (LOPDGDD), le informamos de lo siguiente:

RESPONSABLE DEL TRATAMIENTO: El responsable del tratamiento de sus datos personales es la empresa \
vendedora identificada en el presente contrato.

FINALIDAD: Los datos personales facilitados serán tratados con la finalidad de gestionar la \
relación contractual derivada de la compraventa del vehículo, incluyendo la emisión de facturas, \
gestión de garantías, comunicaciones relacionadas con el servicio postventa, y cumplimiento de \
obligaciones legales.

LEGITIMACIÓN: La base legal para el tratamiento de sus datos es la ejecución del presente \
contrato, así como el cumplimiento de obligaciones legales aplicables (fiscales, mercantiles, de \
tráfico).

CONSERVACIÓN: Sus datos serán conservados durante el tiempo necesario para cumplir con la \
finalidad para la que fueron recabados y para determinar las posibles responsabilidades derivadas \
de dicha finalidad y del tratamiento de los datos. Será de aplicación lo dispuesto en la normativa \
de archivos y documentación.

DESTINATARIOS: Sus datos podrán ser comunicados a:
- Administraciones Públicas competentes en cumplimiento de obligaciones legales (DGT, Agencia \
Tributaria, etc.)
- Entidades financieras en caso de financiación de la operación
- Compañías de seguros en caso de contratación de garantía extendida
- Encargados del tratamiento que presten servicios al responsable

DERECHOS: Puede ejercer sus derechos de acceso, rectificación, supresión, limitación, portabilidad \
y oposición dirigiéndose por escrito al domicilio del responsable o mediante correo electrónico, \
adjuntando copia de su DNI.

Asimismo, le informamos de su derecho a presentar una reclamación ante la Agencia Española de \
Protección de Datos (www.aepd.es) si considera que el tratamiento no se ajusta a la normativa \
vigente.

CONSENTIMIENTO: Mediante la firma del presente contrato, el COMPRADOR declara haber sido \
informado de los extremos contenidos en la presente cláusula y consiente expresamente el \
tratamiento de sus datos personales para las finalidades indicadas.
"""

DATA_PROTECTION_NOTICE_SHORT = """
PROTECCIÓN DE DATOS: De conformidad con el RGPD y la LOPDGDD, sus datos serán tratados para \
gestionar la relación contractual derivada de este documento. Puede ejercer sus derechos de \
acceso, rectificación, supresión, limitación, portabilidad y oposición dirigiéndose al \
responsable del tratamiento. Más información en nuestra política de privacidad.
"""

# ─── FACTURAS ───

INVOICE_LEGAL_NOTES = (
    "Factura expedida conforme a la Ley 37/1992 del IVA y el R.D. 1619/2012 de facturación.",
    "Inscrita en el Registro Mercantil de $province.",
)

PROFORMA_BANNER = "DOCUMENTO NO VÁLIDO COMO FACTURA - PRESUPUESTO PREVIO"

PROFORMA_DISCLAIMERS = (
    "Este documento es un presupuesto previo y no tiene validez fiscal.",
    "No justifica la venta del vehículo hasta que se formalice el pago.",
    "Los precios indicados están sujetos a disponibilidad del vehículo.",
)

PROFORMA_VALIDITY = (
    "Esta proforma tiene una validez de $days días a partir de la fecha de emisión."
)
