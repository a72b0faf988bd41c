"""
Shared fixtures: a temporary SQLite database holding the dictionary,
three ERP tables (C_BPartner, AD_User, AIT_Log) and a few templates.
"""

from datetime import datetime

import pytest
from sqlalchemy import text

from catalog import display_types as dt
from db import ADColumn, ADSequence, ADTab, ADTable, ImportTemplate, get_session, init_db
from import_engine import ExecutionContext

CLIENT_ID = 11
ORG_ID = 12
USER_ID = 100
NOW = datetime(2026, 1, 2, 3, 4, 5)

ERP_DDL = [
    """
    CREATE TABLE C_BPartner (
        C_BPartner_ID INTEGER PRIMARY KEY,
        AD_Client_ID INTEGER NOT NULL, AD_Org_ID INTEGER NOT NULL,
        IsActive CHAR(1) DEFAULT 'Y',
        Created TIMESTAMP, CreatedBy INTEGER,
        Updated TIMESTAMP, UpdatedBy INTEGER,
        UUID VARCHAR(36),
        Value VARCHAR(40), Name VARCHAR(60),
        CreditLimit NUMERIC, FirstSale DATE, IsCustomer CHAR(1)
    )
    """,
    """
    CREATE TABLE AD_User (
        AD_User_ID INTEGER PRIMARY KEY,
        AD_Client_ID INTEGER NOT NULL, AD_Org_ID INTEGER NOT NULL,
        IsActive CHAR(1),
        Created TIMESTAMP, CreatedBy INTEGER,
        Updated TIMESTAMP, UpdatedBy INTEGER,
        UUID VARCHAR(36),
        Name VARCHAR(60), Value VARCHAR(40), EMail VARCHAR(60),
        C_BPartner_ID INTEGER, Birthday DATE
    )
    """,
    """
    CREATE TABLE AIT_Log (
        AIT_Log_ID INTEGER PRIMARY KEY,
        AD_Client_ID INTEGER, AD_Org_ID INTEGER,
        Created TIMESTAMP, CreatedBy INTEGER,
        Updated TIMESTAMP, UpdatedBy INTEGER,
        UUID VARCHAR(36), Message VARCHAR(20)
    )
    """,
]

_STANDARD = [
    ("AD_Client_ID", dt.TABLEDIR, 10),
    ("AD_Org_ID", dt.TABLEDIR, 10),
    ("Created", dt.DATETIME, 7),
    ("CreatedBy", dt.TABLE, 10),
    ("Updated", dt.DATETIME, 7),
    ("UpdatedBy", dt.TABLE, 10),
    ("UUID", dt.STRING, 36),
]

DICTIONARY = {
    "C_BPartner": (100, _STANDARD + [
        ("C_BPartner_ID", dt.ID, 10),
        ("IsActive", dt.YESNO, 1),
        ("Value", dt.STRING, 40),
        ("Name", dt.STRING, 60),
        ("CreditLimit", dt.AMOUNT, 22),
        ("FirstSale", dt.DATE, 7),
        ("IsCustomer", dt.YESNO, 1),
    ]),
    "AD_User": (200, _STANDARD + [
        ("AD_User_ID", dt.ID, 10),
        ("IsActive", dt.YESNO, 1),
        ("Name", dt.STRING, 60),
        ("Value", dt.STRING, 40),
        ("EMail", dt.STRING, 60),
        ("C_BPartner_ID", dt.SEARCH, 10),
        ("Birthday", dt.DATE, 7),
    ]),
    # No IsActive and no sequence on purpose.
    "AIT_Log": (300, _STANDARD + [
        ("AIT_Log_ID", dt.ID, 10),
        ("Message", dt.STRING, 20),
    ]),
}

TAB_BPARTNER = 1000
TAB_USER = 2000
TAB_WITHOUT_TABLE = 9000

TPL_USER = 1                # AD_User, header taken from the file
TPL_USER_HEADER = 2         # AD_User, header stored on the template
TPL_BPARTNER = 3            # C_BPartner, header taken from the file
TPL_BROKEN = 4              # tab without table


def _seed(session):
    col_id = 1
    for table_name, (table_id, columns) in DICTIONARY.items():
        table = ADTable(id=table_id, table_name=table_name, name=table_name)
        for name, reference, length in columns:
            table.columns.append(ADColumn(
                id=col_id, column_name=name, reference_id=reference,
                field_length=length,
            ))
            col_id += 1
        session.add(table)

    session.add_all([
        ADTab(id=TAB_BPARTNER, table_id=100, name="Business Partner"),
        ADTab(id=TAB_USER, table_id=200, name="Contact"),
        ADTab(id=TAB_WITHOUT_TABLE, table_id=None, name="Orphan"),
        ADSequence(id=1, name="C_BPartner", current_next=2000000),
        ADSequence(id=2, name="AD_User", current_next=1000000),
        ImportTemplate(id=TPL_USER, name="Contacts", tab_id=TAB_USER,
                       client_id=CLIENT_ID, org_id=0),
        ImportTemplate(id=TPL_USER_HEADER, name="Contacts (stored header)",
                       tab_id=TAB_USER, client_id=CLIENT_ID, org_id=0,
                       header_csv="Name,C_BPartner_ID[Value]/K"),
        ImportTemplate(id=TPL_BPARTNER, name="Business partners",
                       tab_id=TAB_BPARTNER, client_id=CLIENT_ID, org_id=ORG_ID),
        ImportTemplate(id=TPL_BROKEN, name="Broken", tab_id=TAB_WITHOUT_TABLE),
    ])
    session.flush()

    session.execute(text(
        "INSERT INTO C_BPartner (C_BPartner_ID, AD_Client_ID, AD_Org_ID, Value, Name, IsCustomer) "
        "VALUES (:id, :client, 0, :value, :name, 'N')"
    ), [
        {"id": 100, "client": CLIENT_ID, "value": "ACME01", "name": "Acme Corp"},
        {"id": 101, "client": CLIENT_ID, "value": "BETA01", "name": "Beta Ltd"},
        {"id": 102, "client": CLIENT_ID, "value": "DUP", "name": "Twin A"},
        {"id": 103, "client": CLIENT_ID, "value": "DUP", "name": "Twin B"},
        {"id": 104, "client": 99, "value": "OTHER", "name": "Other client"},
    ])
    session.execute(text(
        "INSERT INTO AD_User (AD_User_ID, AD_Client_ID, AD_Org_ID, Value, Name, C_BPartner_ID) "
        "VALUES (50, :client, 0, 'jdoe', 'John Doe', 101)"
    ), {"client": CLIENT_ID})


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'aitimport-test.sqlite'}"


@pytest.fixture
def engine(db_url):
    engine = init_db(db_url)
    with engine.begin() as conn:
        for ddl in ERP_DDL:
            conn.execute(text(ddl))
    session = get_session()
    try:
        _seed(session)
        session.commit()
    finally:
        session.close()
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    s = get_session()
    yield s
    s.rollback()
    s.close()


@pytest.fixture
def context():
    return ExecutionContext(client_id=CLIENT_ID, org_id=ORG_ID,
                            user_id=USER_ID, now=NOW)


@pytest.fixture
def write_file(tmp_path):
    """Write ``content`` to a file under tmp_path and return its path."""
    def _write(content: str, name: str = "import.csv"):
        p = tmp_path / name
        p.write_text(content, encoding="utf-8")
        return p
    return _write


def count(session, sql: str, **params) -> int:
    return session.execute(text(sql), params).scalar_one()
