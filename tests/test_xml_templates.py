import xml.etree.ElementTree as ET

import pytest

from netnexus.template import TemplateRegistry
from netnexus.xml_templates import clean_template_content, parse_config_templates

SAMPLE = """<config_templates>
  <template-def template-name="bgp" priority="10">
    <template-def template-name="bgp_peer"/>
    <template-def template-name="bgp_family"/>
  </template-def>
  <template-def template-name="system" priority="20"/>
  <template-def template-name="nobody"/>
  <template db="bgp_protocol , bgp_session">
bgp {bgp_protocol.as_number}
 router-id {bgp_protocol.router_id}
  </template>
  <template template-name="bgp" db="bgp_protocol , bgp_session">
bgp {bgp_protocol.as_number}
 router-id {bgp_protocol.router_id}
  </template>
  <template template-name="bgp_peer" db="bgp_session">
 peer {bgp_session.peer}
  </template>
  <template template-name="system">
sysname x
  </template>
  <template template-name="ghost" db="none">
ghost
  </template>
</config_templates>"""


@pytest.fixture
def loaded():
    registry = TemplateRegistry()
    result = parse_config_templates(ET.fromstring(SAMPLE), registry)
    return registry, result


@pytest.mark.parametrize(
    "content, expected",
    [
        ("\n  a b\n  ", "  a b"),
        ("\nline1\nline2\n\t \t", "line1\nline2"),
        ("plain", "plain"),
        ("\nkeep  \n", "keep  "),
        ("x\ny", "x\ny"),
    ],
)
def test_clean_template_content(content, expected):
    assert clean_template_content(content) == expected


@pytest.mark.parametrize("content", [None, "", "\n"])
def test_clean_template_content_empty(content):
    assert clean_template_content(content) is None


def test_clean_keeps_inner_indentation():
    content = "\n  a\n    b\n  "
    assert clean_template_content(content) == "  a\n    b"


def test_priorities_and_children(loaded):
    registry, _ = loaded
    bgp = registry.find("bgp")
    assert bgp.priority == 10
    assert bgp.child_names == ["bgp_peer", "bgp_family"]
    assert registry.find("system").priority == 20
    assert registry.find("nobody").priority == 0


def test_child_templates_created(loaded):
    registry, _ = loaded
    assert registry.find("bgp_family").priority == 0
    assert registry.find("bgp_family").body is None
    assert "bgp_peer" in registry


def test_body_and_db_names(loaded):
    registry, _ = loaded
    body = registry.find("bgp").body
    assert body.db_names == ["bgp_protocol", "bgp_session"]
    assert body.content == "bgp {bgp_protocol.as_number}\n router-id {bgp_protocol.router_id}"
    peer = registry.find("bgp_peer").body
    assert peer.content == " peer {bgp_session.peer}"
    assert peer.db_names == ["bgp_session"]


def test_body_without_db_is_ignored(loaded):
    registry, _ = loaded
    assert registry.find("system").body is None


def test_unknown_template_body_not_registered(loaded):
    registry, result = loaded
    assert registry.find("ghost") is None
    assert len(registry) == len(result) == 5


def test_returned_templates_are_registered(loaded):
    registry, result = loaded
    for template in result:
        assert registry.find(template.name) is template


def test_render_after_load(loaded):
    registry, _ = loaded
    text = registry.find("bgp").render(
        {"bgp_protocol.as_number": "65000", "bgp_protocol.router_id": "1.1.1.1"}
    )
    assert text == "bgp 65000\r\n router-id 1.1.1.1"


def test_ordering_by_priority(loaded):
    registry, _ = loaded
    names = [t.name for t in registry.all()]
    assert names[:2] == ["system", "bgp"]


def test_defined_template_overrides_earlier_child():
    xml = """<config_templates>
      <template-def template-name="a" priority="1">
        <template-def template-name="b"/>
      </template-def>
      <template-def template-name="b" priority="7"/>
    </config_templates>"""
    registry = TemplateRegistry()
    parse_config_templates(ET.fromstring(xml), registry)
    assert registry.find("b").priority == 7
    assert len(registry) == 2


def test_empty_db_attribute_gives_no_db_names():
    xml = """<config_templates>
      <template-def template-name="a"/>
      <template template-name="a" db="">text</template>
    </config_templates>"""
    registry = TemplateRegistry()
    parse_config_templates(ET.fromstring(xml), registry)
    body = registry.find("a").body
    assert body.content == "text"
    assert body.db_names == []


def test_lenient_priority():
    xml = """<config_templates>
      <template-def template-name="a" priority="12abc"/>
      <template-def template-name="b" priority="abc"/>
    </config_templates>"""
    registry = TemplateRegistry()
    parse_config_templates(ET.fromstring(xml), registry)
    assert registry.find("a").priority == 12
    assert registry.find("b").priority == 0


def test_definition_without_name_skipped():
    xml = """<config_templates>
      <template-def priority="3"/>
    </config_templates>"""
    registry = TemplateRegistry()
    result = parse_config_templates(ET.fromstring(xml), registry)
    assert result == []
    assert len(registry) == 0