"""
Static "on this day" table of historical events.

Entries are keyed by ``MM-DD`` and never change at runtime. The order of a
key's entries is the table order; display code sorts by year descending.
"""
import datetime
from types import MappingProxyType
from typing import List, Mapping, Tuple, Union
from .models import HistoricalEvent

DateLike = Union[str, datetime.date]

_H = HistoricalEvent

_EVENTS: Mapping[str, Tuple[HistoricalEvent, ...]] = MappingProxyType({
    "01-01": (
        _H(1959, "Cuban Revolution", "Fidel Castro takes power in Cuba, overthrowing the dictator Batista"),
        _H(2002, "Euro enters circulation", "The euro becomes legal tender in 12 European countries, replacing national currencies"),
        _H(1863, "Emancipation Proclamation", "Abraham Lincoln signs the order declaring slaves in the Confederate states free"),
    ),
    "01-02": (
        _H(1492, "End of the Reconquista", "The Catholic Monarchs take Granada, the last Muslim kingdom in Spain"),
        _H(1839, "First photograph of a person", "Louis Daguerre takes the first photograph showing a recognisable person"),
    ),
    "01-27": (
        _H(1945, "Liberation of Auschwitz", "Soviet troops liberate the Auschwitz-Birkenau concentration camp"),
        _H(1967, "Apollo 1 disaster", "A fire during a launch pad test kills astronauts Grissom, White and Chaffee"),
    ),
    "02-14": (
        _H(1876, "Telephone patent", "Alexander Graham Bell files the telephone patent, hours ahead of Elisha Gray"),
        _H(1929, "Saint Valentine's Day Massacre", "Seven members of a gang rivalling Al Capone are killed in Chicago"),
    ),
    "03-15": (
        _H(-44, "Assassination of Julius Caesar", "Julius Caesar is stabbed to death in the Senate by a group of conspirators"),
        _H(1917, "Abdication of the Tsar", "Tsar Nicholas II abdicates, ending the Romanov dynasty"),
    ),
    "04-15": (
        _H(1912, "Sinking of the Titanic", "RMS Titanic sinks after striking an iceberg; more than 1,500 people die"),
        _H(1865, "Death of Lincoln", "President Abraham Lincoln dies after being shot at Ford's Theatre"),
    ),
    "05-08": (
        _H(1945, "Victory in Europe", "Nazi Germany signs its unconditional surrender, ending the Second World War in Europe"),
        _H(1886, "Coca-Cola is invented", "Pharmacist John Pemberton sells the first Coca-Cola in Atlanta, Georgia"),
    ),
    "06-06": (
        _H(1944, "D-Day", "The Allies land in Normandy, beginning the liberation of Western Europe"),
        _H(1984, "Operation Blue Star", "The Indian army storms the Golden Temple in Amritsar"),
    ),
    "07-04": (
        _H(1776, "US Independence", "The Continental Congress adopts the Declaration of Independence from Great Britain"),
        _H(2012, "Higgs boson", "CERN announces the discovery of the Higgs boson"),
    ),
    "07-20": (
        _H(1969, "Moon landing", "Neil Armstrong and Buzz Aldrin become the first humans to walk on the Moon"),
        _H(1944, "Plot against Hitler", "A bomb attack on Adolf Hitler at his headquarters fails"),
    ),
    "08-06": (
        _H(1945, "Atomic bombing of Hiroshima", "The US drops the first atomic bomb on Hiroshima, killing more than 70,000 people instantly"),
        _H(1991, "The World Wide Web goes public", "Tim Berners-Lee publishes the first website, opening the era of the public Internet"),
    ),
    "09-11": (
        _H(2001, "September 11 attacks", "Terrorist attacks on the Twin Towers and the Pentagon kill almost 3,000 people"),
        _H(1973, "Coup in Chile", "Augusto Pinochet overthrows the democratically elected government of Salvador Allende"),
    ),
    "10-12": (
        _H(1492, "Columbus reaches the Americas", "Christopher Columbus lands in the Bahamas, believing he has reached the Indies"),
        _H(1968, "Mexico City Olympics", "The Games of the XIX Olympiad open in Mexico City"),
    ),
    "11-02": (
        _H(1947, "Flight of the Spruce Goose", "First flight of the Hughes H-4 Hercules, the largest flying boat ever built, with a 97 metre wingspan"),
        _H(1917, "Balfour Declaration", "The United Kingdom backs a \"national home for the Jewish people\" in Palestine"),
        _H(1936, "First BBC television broadcast", "The BBC starts the world's first regular public television service"),
    ),
    "11-09": (
        _H(1989, "Fall of the Berlin Wall", "The wall dividing East and West Berlin is torn down, symbol of the end of the Cold War"),
        _H(1938, "Kristallnacht", "Pogrom against Jews in Germany and Austria; thousands of shops and synagogues destroyed"),
    ),
    "12-07": (
        _H(1941, "Attack on Pearl Harbor", "Japan attacks the US naval base at Pearl Harbor, bringing the United States into the Second World War"),
        _H(1972, "The Blue Marble", "The Apollo 17 crew takes \"The Blue Marble\", one of the most iconic photographs of Earth"),
    ),
    "12-25": (
        _H(1991, "Dissolution of the USSR", "Mikhail Gorbachev resigns and the Soviet Union formally ceases to exist"),
        _H(800, "Coronation of Charlemagne", "Pope Leo III crowns Charlemagne emperor in Rome"),
        _H(1989, "Execution of Ceausescu", "Romanian dictator Nicolae Ceausescu and his wife are executed after a summary trial"),
    ),
})


def month_day_key(date: DateLike) -> str:
    """Return the ``MM-DD`` key for an ISO date string or a date."""
    if isinstance(date, datetime.date):
        return date.strftime("%m-%d")
    # YYYY-MM-DD -> MM-DD
    return date[5:10]


def lookup(date: DateLike) -> Tuple[HistoricalEvent, ...]:
    """Historical events for the month-day of ``date`` (year ignored)."""
    return _EVENTS.get(month_day_key(date), ())


def lookup_for_display(date: DateLike) -> List[HistoricalEvent]:
    """Same as :func:`lookup`, most recent year first."""
    return sorted(lookup(date), key=lambda e: e.year, reverse=True)


def search(query: str) -> List[Tuple[str, HistoricalEvent]]:
    """
    Find almanac entries whose title or description contains ``query``.

    Returns:
        List of (MM-DD key, entry) tuples in table order
    """
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        (key, event)
        for key, events in _EVENTS.items()
        for event in events
        if needle in event.title.lower() or needle in event.description.lower()
    ]
