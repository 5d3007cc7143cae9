from typing import List, Tuple

from schemas import CatalogEntry

# Declaration order is the ranking tie-break
CATALOG: Tuple[CatalogEntry, ...] = (
    CatalogEntry(name='ELF Cosmetics', url='https://www.elfcosmetics.com/', category='SKIN'),
    CatalogEntry(name='Biotherm', url='https://www.biotherm.ca/', category='SKIN'),
    CatalogEntry(name='IT Cosmetics', url='https://itcosmetics.ca', category='SKIN'),
    CatalogEntry(name='Kérastase', url='https://www.kerastase.ca/', category='HAIR'),
    CatalogEntry(name='Pantene', url='https://pantene.ca/en-ca', category='HAIR'),
    CatalogEntry(name='Garnier', url='https://www.garnier.ca/', category='HAIR'),
    CatalogEntry(name='Herbal Essences', url='https://herbalessences.com/en-us/', category='HAIR'),
)


def categories(catalog=CATALOG) -> List[str]:
    seen = []
    for entry in catalog:
        if entry.category not in seen:
            seen.append(entry.category)
    return seen


def entries_for(category: str, catalog=CATALOG) -> List[CatalogEntry]:
    return [e for e in catalog if e.category == category]
