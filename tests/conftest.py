"""Test configuration and fixtures."""

import pytest


class FakeTransport:
    """Transport serving canned pages and recording requested URLs."""

    def __init__(self, *pages: str):
        self.pages = list(pages)
        self.requests: list[tuple[str, str]] = []

    def fetch_text(self, url: str, encoding: str) -> str:
        self.requests.append((url, encoding))
        return self.pages.pop(0)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.requests]


@pytest.fixture
def fake_transport():
    """Factory for transports answering with the given pages in order."""
    return FakeTransport


@pytest.fixture
def db_nearby_html():
    """DB station board page listing stations near Frankfurt Hbf."""
    return """
    <html><body>
    <div class="haupt">
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?near=Anzeigen&amp;evaId=8000105&amp;boardType=dep">Frankfurt(Main)Hbf</a><br />
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?evaId=8098105&amp;boardType=dep"> Frankfurt(M) Hbf (tief) </a><br />
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?evaId=8000105&amp;boardType=arr">Frankfurt(Main)Hbf</a><br />
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?evaId=&amp;boardType=dep">Broken</a><br />
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?evaId=8070003&amp;boardType=dep">Frankfurt(M) Flughafen Fernbf</a><br />
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?evaId=8002041&amp;boardType=dep">Frankfurt(Main)Galluswarte &amp; Messe</a><br />
    <a href="http://mobile.bahn.de/bin/mobil/bhftafel.exe/dn?evaId=8011068&amp;boardType=dep">Frankfurt-H&#246;chst</a><br />
    <a href="http://mobile.bahn.de/bin/mobil/query.exe/dn?ld=1">Verbindungen</a>
    </div>
    </body></html>
    """


@pytest.fixture
def stops_json():
    """stop2json answer of the coordinate locator."""
    return """
    {"stops":[
      {"x":"8663785","y":"50107149","name":"Frankfurt(Main)Hbf","extId":"8000105","puic":"80","dist":"120"},
      {"x":"8661994","y":"50106690","name":"Frankfurt (Main) Hauptbahnhof S&#252;d","extId":"8098105","dist":"250"},
      {"x":"8672000","y":"50110000","name":"Willy-Brandt-Platz","extId":"3000010","dist":"400"}
    ]}
    """


@pytest.fixture
def suggestions_js():
    """ajax-getstop completion snippet."""
    return (
        'SLs.sls={"suggestions":['
        '{"value":"Frankfurt(Main)Hbf","id":"A=1@O=Frankfurt(Main)Hbf@X=8663785@Y=50107149@U=80@L=008000105@B=1@p=1338244843@",'
        '"extId":"008000105","type":"1","typeStr":"[Bhf/Hst]","xcoord":"8663785","ycoord":"50107149",'
        '"state":"id","prodClass":"31","weight":"32767"},'
        '{"value":"Frankfurt, Flughafenstraße 1","type":"2","xcoord":"8570000","ycoord":"50050000"},'
        '{"value":"Frankfurt, Palmengarten","type":"4","xcoord":"8657000","ycoord":"50122000"},'
        '{"value":"Something else","type":"128"}'
        "]};SLs.showSuggestion();"
    )


@pytest.fixture
def departures_xml():
    """vs_java3 station board with one broken journey."""
    return """<?xml version="1.0" encoding="iso-8859-1"?>
<StationTable>
<St name="Frankfurt(Main)Hbf" evaId="8000105"/>
<Journey fpTime="08:15" fpDate="01.05.12" delay="+ 3" platform="12" targetLoc="Wiesbaden Hbf" dirnr="8000250" prod="S 8#S" />
<Journey fpTime="08:20" fpDate="01.05.12" delay="cancel" platform="7" targetLoc="Gie&#223;en" prod="RE 4200#RE" />
<Journey fpTime="08:25" fpDate="01.05.12" delay="-" e_delay="0" platform="1" targetLoc="Hanau Hbf" prod="4200" />
<Journey fpDate="01.05.12" prod="S 9#S" targetLoc="Broken" />
<Journey fpTime="08:31" fpDate="01.05.12" targetLoc="Frankfurt S&#252;d" prod="Schw-B" evaId="8098105" />
<Journey fpTime="08:40" fpDate="01.05.12" delay="-" platform="3" targetLoc="Mainz &amp; Wiesbaden" prod="ICE 1234#ICE" />
</StationTable>
"""


@pytest.fixture
def connections_xml():
    """First page of a connection search, including a broken connection."""
    return """<?xml version="1.0" encoding="iso-8859-1"?>
<ResC>
<ConResCtxt ident="1f.02345678.1335852900" seqnr="1"/>
<Connection id="C1-0" date="01.05.12">
  <Section>
    <Dep stationId="3000001" name="Hauptwache" x="8679044" y="50113954" time="23:50" platform="2"/>
    <Journey prod="S 8#S" dir="Wiesbaden Hbf"/>
    <Arr stationId="3000010" name="Frankfurt (Main) Hauptbahnhof" time="23:55" platform="103"/>
  </Section>
  <Section>
    <Dep stationId="3000010" name="Frankfurt (Main) Hauptbahnhof" time="23:55"/>
    <Walk min="5"/>
    <Arr stationId="3000011" name="Frankfurt (Main) Hauptbahnhof tief" time="00:00"/>
  </Section>
  <Section>
    <Dep stationId="3000011" name="Frankfurt (Main) Hauptbahnhof tief" time="00:05"/>
    <Journey prod="Tram 16#STR" dir="Offenbach Stadtgrenze"/>
    <Arr stationId="3000912" name="S&#252;dbahnhof" time="00:15"/>
  </Section>
</Connection>
<Connection id="C1-1" date="01.05.12">
  <Section>
    <Dep stationId="3000001" name="Hauptwache" time="23:58"/>
    <Journey prod="U 1#U" dir="Südbahnhof"/>
    <Arr stationId="3000912" name="Südbahnhof" time="00:06"/>
  </Section>
</Connection>
<Connection id="C1-2" date="01.05.12">
  <Section>
    <Dep stationId="3000001" name="Hauptwache" time="00:10"/>
    <Journey prod="U 2#U"/>
  </Section>
</Connection>
</ResC>
"""


@pytest.fixture
def later_connections_xml():
    """Follow-up page returned when scrolling to later connections."""
    return """<ResC>
<ConResCtxt ident="1f.02345678.1335852900" seqnr="2"/>
<Connection id="C2-0" date="02.05.12">
  <Section>
    <Dep stationId="3000001" name="Hauptwache" time="00:20"/>
    <Journey prod="U 1#U" dir="Südbahnhof"/>
    <Arr stationId="3000912" name="Südbahnhof" time="00:28"/>
  </Section>
</Connection>
</ResC>
"""
