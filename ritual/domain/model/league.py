"""League catalog.

Leagues are fixed-size XP tiers: index = floor(xp / threshold), clamped to
the last league.
"""

from ritual.domain.model.common import DomainModel


class League(DomainModel):
    """A progression tier."""

    index: int
    key: str
    name: str
    color: str
    description: str


LEAGUES: tuple[League, ...] = (
    League(index=0, key="Bronze", name="Figüran", color="#CD7F32", description="Sahneye ilk adım."),
    League(index=1, key="Silver", name="İzleyici", color="#C0C0C0", description="Gözlemlemeye başladın."),
    League(index=2, key="Gold", name="Yorumcu", color="#FFD700", description="Sesin duyuluyor."),
    League(index=3, key="Platinum", name="Eleştirmen", color="#E5E4E2", description="Analizlerin derinleşiyor."),
    League(index=4, key="Emerald", name="Sinema Gurmesi", color="#50C878", description="Zevklerin inceliyor."),
    League(index=5, key="Sapphire", name="Sinefil", color="#0F52BA", description="Tutkun bir yaşam biçimi."),
    League(index=6, key="Ruby", name="Vizyoner", color="#E0115F", description="Geleceği görüyorsun."),
    League(index=7, key="Diamond", name="Yönetmen", color="#B9F2FF", description="Kendi sahnelerini kur."),
    League(index=8, key="Master", name="Auteur", color="#9400D3", description="İmzanı at."),
    League(index=9, key="Grandmaster", name="Efsane", color="#FF0000", description="Tarihe geçtin."),
    League(index=10, key="Absolute", name="Absolute", color="#000000", description="The Void"),
    League(index=11, key="Eternal", name="Eternal", color="#FFFFFF", description="The Light"),
)

ETERNAL_LEAGUE_KEY = "Eternal"
