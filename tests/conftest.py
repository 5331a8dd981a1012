"""
Shared fixtures: sample view definitions and a small catalog.
"""

import pytest

from view_lineage import DictViewCatalog

ATTRIBUTE_VIEW_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Dimension:dimension xmlns:Dimension="http://www.sap.com/ndb/BiModelDimension.ecore" id="AT_CUSTOMER">
  <descriptions defaultDescription="Customers &amp; regions"/>
  <attributes>
    <attribute id="CUSTOMER_ID" key="true">
      <keyMapping schemaName="SALES" columnObjectName="CUSTOMER" columnName="ID"/>
    </attribute>
    <attribute id="NAME">
      <keyMapping schemaName="SALES" columnObjectName="CUSTOMER" columnName="NAME"/>
    </attribute>
  </attributes>
</Dimension:dimension>
"""

ANALYTIC_VIEW_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Cube:cube xmlns:Cube="http://www.sap.com/ndb/BiModelCube.ecore" id="AN_ORDERS">
  <privateMeasureGroup id="MeasureGroup">
    <attributes>
      <attribute id="ORDER_ID">
        <keyMapping schemaName="SALES" columnObjectName="ORDERS" columnName="ORDER_ID"/>
      </attribute>
    </attributes>
    <baseMeasures>
      <measure id="AMOUNT" aggregationType="sum">
        <measureMapping schemaName="SALES" columnObjectName="ORDERS" columnName="AMOUNT"/>
      </measure>
    </baseMeasures>
  </privateMeasureGroup>
</Cube:cube>
"""

CALCULATION_VIEW_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Calculation:scenario xmlns:Calculation="http://www.sap.com/ndb/BiModelCalculation.ecore" id="CV_ORDERS">
  <dataSources>
    <DataSource id="ORDERS" type="DATA_BASE_TABLE">
      <columnObject schemaName="SALES" columnObjectName="ORDERS"/>
    </DataSource>
    <DataSource id="AT_CUSTOMER" type="ATTRIBUTE_VIEW">
      <resourceUri>/acme.sales/attributeviews/AT_CUSTOMER</resourceUri>
    </DataSource>
  </dataSources>
  <calculationViews>
    <calculationView xsi:type="Calculation:ProjectionView" id="Projection_1">
      <input node="#ORDERS">
        <mapping xsi:type="Calculation:AttributeMapping" target="ORDER_ID" source="ORDER_ID"/>
        <mapping xsi:type="Calculation:AttributeMapping" target="AMOUNT" source="AMOUNT"/>
      </input>
      <input node="#AT_CUSTOMER">
        <mapping xsi:type="Calculation:AttributeMapping" target="NAME" source="NAME"/>
      </input>
    </calculationView>
  </calculationViews>
  <logicalModel id="Projection_1">
    <attributes>
      <attribute id="REGION">
        <keyMapping columnObjectName="ORDERS" columnName="REGION"/>
      </attribute>
    </attributes>
  </logicalModel>
</Calculation:scenario>
"""

BROKEN_VIEW_XML = """<Calculation:scenario id="CV_BROKEN">
  <dataSources>
    <DataSource id="ORDERS" type="DATA_BASE_TABLE">
  </dataSources>
</Calculation:scenario>
"""


def view_row(package_id, object_name, object_suffix, cdata):
    return {
        "package_id": package_id,
        "object_name": object_name,
        "object_suffix": object_suffix,
        "cdata": cdata,
    }


@pytest.fixture
def attribute_view_xml():
    return ATTRIBUTE_VIEW_XML


@pytest.fixture
def analytic_view_xml():
    return ANALYTIC_VIEW_XML


@pytest.fixture
def calculation_view_xml():
    return CALCULATION_VIEW_XML


@pytest.fixture
def catalog_dict():
    """Catalog with three valid views, one broken view and a procedure.

    CV_ORDERS depends on AT_CUSTOMER (dependency relation) and on
    AN_ORDERS (cross reference).
    """
    return {
        "views": [
            view_row("acme.sales", "AT_CUSTOMER", "attributeview", ATTRIBUTE_VIEW_XML),
            view_row("acme.sales", "AN_ORDERS", "analyticview", ANALYTIC_VIEW_XML),
            view_row("acme.sales", "CV_ORDERS", "calculationview", CALCULATION_VIEW_XML),
            view_row("acme.broken", "CV_BROKEN", "calculationview", BROKEN_VIEW_XML),
            view_row("acme.sales", "P_LOAD", "procedure", "<procedure/>"),
        ],
        "dependencies": [
            {
                "dependent_object_name": "acme.sales/CV_ORDERS",
                "base_object_name": "acme.sales/AT_CUSTOMER",
            },
        ],
        "cross_references": [
            {
                "from_package_id": "acme.sales",
                "from_object_name": "CV_ORDERS",
                "from_object_suffix": "calculationview",
                "to_package_id": "acme.sales",
                "to_object_name": "AN_ORDERS",
                "to_object_suffix": "analyticview",
            },
        ],
        "table_dependencies": [
            {
                "dependent_object_name": "acme.sales/CV_ORDERS",
                "base_schema_name": "SALES",
                "base_object_name": "ORDERS",
            },
            {
                "dependent_object_name": "acme.sales/AN_ORDERS",
                "base_schema_name": "SALES",
                "base_object_name": "ORDERS",
            },
            {
                "dependent_object_name": "acme.sales/AT_CUSTOMER",
                "base_schema_name": "SALES",
                "base_object_name": "CUSTOMER",
            },
        ],
    }


@pytest.fixture
def catalog(catalog_dict):
    return DictViewCatalog(catalog_dict)
