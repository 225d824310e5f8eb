"""
Built-in NewNetworkUpload template.

This is the meter/endpoint upload sheet used to update the metering system
from CIS/Billing exports. Projects without a custom template are validated
against it.
"""

from typing import Any, Dict, List
from .template import Template


NEW_NETWORK_UPLOAD_NAME = 'NewNetworkUpload'

NEW_NETWORK_UPLOAD_DESCRIPTION = (
    'Format for NewNetworkUpload CSV used to update the metering system with '
    'information from CIS/Billing. It is recommended to have this file '
    'automated on a nightly basis.'
)

# Column sheet entries. ``length`` is either a maximum or a "min-max" range.
NEW_NETWORK_UPLOAD_COLUMNS: List[Dict[str, Any]] = [
    {
        'column_name': 'IGNORE', 'is_required': True, 'allow_blank': False,
        'data_type': 'boolean', 'length': 5, 'example': 'no',
        'notes': 'Default to "no". Set to "yes" to skip this row during import.',
    },
    {
        'column_name': 'CANCREATE', 'is_required': True, 'allow_blank': False,
        'data_type': 'boolean', 'length': 5, 'example': 'yes',
        'notes': '(yes, no) Default to Yes. Yes can always be provided even if the '
                 'device/meter already exists.',
    },
    {
        'column_name': 'CREF', 'is_required': True, 'allow_blank': False,
        'is_unique': True, 'length': 50, 'example': 'SPID_015481',
        'notes': 'Must always be unique and permanent for each Meter/Endpoint '
                 'combination. Does not change even if the meter or ERT number changes.',
    },
    {
        'column_name': 'METERSERIAL', 'is_required': True, 'allow_blank': False,
        'is_unique': True, 'length': '5-48', 'example': '45812-h',
        'notes': 'The meter serial number (MUST BE UNIQUE). Cannot be less than 5 '
                 'characters. Compound meters may add -h for high side and -l for low side.',
    },
    {
        'column_name': 'ADDTAG', 'is_required': True, 'allow_blank': False,
        'example': 'readtype=02 cellular-device-installed mcategory=4',
        'notes': 'Stores the read type code used for truncation/multiplication of RF '
                 'readings. Cellular endpoints should pass "Cellular-Device-Installed".',
    },
    {
        'column_name': 'ACCOUNTREF', 'is_required': True, 'allow_blank': False,
        'length': 25, 'example': 'ACCN_16975',
        'notes': 'Used to look up an account, must be unique to Net.',
    },
    {
        'column_name': 'CUSTOMERNAME', 'length': 100, 'example': '"Cassidy, Butch"',
        'notes': 'Customer name (First Last or "Last, First"). If a comma exists in '
                 'the value, enclose it with double quotes.',
    },
    {
        'column_name': 'PROPERTYADDRESS', 'is_required': True, 'allow_blank': False,
        'length': 500, 'example': '1908 San Vincente Rd',
        'notes': 'Property address of the meter. If a comma exists in the address, '
                 'enclose it in double quotes.',
    },
    {
        'column_name': 'MIUSERIAL', 'is_required': True, 'allow_blank': False,
        'is_unique': True, 'length': 50, 'example': '67125820',
        'notes': 'Endpoint ID (Transponder Id, Device Id, ERT Id) associated to a '
                 'specific meter. Cellular ERTs use a 10 digit ID with a leading 0.',
    },
    {
        'column_name': 'ROUTENAME', 'is_required': True, 'allow_blank': False,
        'length': 25, 'example': 'Book',
        'notes': 'Exact match of an existing route (Route, Book or Cycle number).',
    },
    {
        'column_name': 'ADDRESSLINE1', 'length': 500, 'example': '1908 San Vincente Rd',
        'notes': 'Additional address line if needed.',
    },
    {
        'column_name': 'LAT', 'example': '36.418176',
        'notes': 'Latitude coordinate for the meter location. Use decimal degrees format.',
    },
    {
        'column_name': 'LON', 'example': '-116.074688',
        'notes': 'Longitude coordinate for the meter location. Use decimal degrees format.',
    },
    {
        'column_name': 'METERTYPE', 'example': 'Generic',
        'notes': 'Type of meter (e.g., Generic, Specific model).',
    },
    {
        'column_name': 'METERMODEL', 'example': 'Gas',
        'notes': 'Meter model type (e.g., Gas, Water).',
    },
    {
        'column_name': 'COLLECTIONMETHOD', 'is_required': True, 'allow_blank': False,
        'example': 'Cellular 500G ERT',
        'notes': 'How readings are collected. Common values: Manual Read, '
                 'Cellular 500W ERT, Cellular 500G ERT.',
    },
    {
        'column_name': 'SEQUENCE', 'example': '10',
        'notes': 'Order in the route for reading.',
    },
    {
        'column_name': 'METERNOMINALSIZE', 'example': '5/8"',
        'notes': 'Physical size of the meter.',
    },
    {
        'column_name': 'METERFORMAT', 'example': '4.0',
        'notes': 'Format/precision for meter readings.',
    },
    {
        'column_name': 'METERUNITS', 'example': 'CCF',
        'notes': 'Units of measurement. Gas: CCF, cu ft. Water: CCF, CGAL, cu ft, '
                 'GAL, KGAL. Electric: KW, KWH.',
    },
    {
        'column_name': 'METERINSTALLATIONDATE', 'example': '17/06/1992',
        'notes': 'Date the meter was installed. Format: DD/MM/YYYY or YYYY-MM-DD.',
    },
    {
        'column_name': 'CATEGORY', 'example': 'Residential',
        'notes': 'Customer category (e.g., Residential, Commercial).',
    },
    {
        'column_name': 'METERCOMMENT', 'example': 'gate code: 4434',
        'notes': 'Notes or comments about the meter location.',
    },
    {
        'column_name': 'METERREF',
        'notes': 'Additional meter reference if needed.',
    },
    {
        'column_name': 'PHONE', 'example': '270-555-5555',
        'notes': 'Customer phone number.',
    },
    {
        'column_name': 'CUSTOMEREMAIL1', 'example': 'Butch.Cassidy@gmail.com',
        'notes': 'Customer email address.',
    },
    {
        'column_name': 'DMA', 'example': '10',
        'notes': 'District Metered Area identifier.',
    },
    {
        'column_name': 'PERMANTENTLYDISCONNECTED', 'data_type': 'boolean', 'example': 'False',
        'notes': 'Set to True if the meter is permanently disconnected and should not be read.',
    },
]


def default_template() -> Template:
    """Return the built-in NewNetworkUpload template."""
    return Template.from_dict({
        'name': NEW_NETWORK_UPLOAD_NAME,
        'description': NEW_NETWORK_UPLOAD_DESCRIPTION,
        'rules': NEW_NETWORK_UPLOAD_COLUMNS,
    })
