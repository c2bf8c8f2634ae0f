from dataclasses import dataclass

from common.conf import storefront_setting


@dataclass(frozen=True)
class HeroSlide:
    src: str
    title: str
    description: str


HERO_SLIDES = (
    HeroSlide("/v9-tricycle.png", "V9 Electric Tricycle", "Premium electric tricycle with advanced features"),
    HeroSlide("/t20.png", "T20 Electric Vehicle", "High-performance electric vehicle for urban mobility"),
    HeroSlide("/cyborg.png", "Cyborg Electric Bike", "Futuristic design meets sustainable transportation"),
)


class HeroSlider:
    """Carousel position over HERO_SLIDES; wraps in both directions."""

    def __init__(self, slides=HERO_SLIDES, current=0, playing=True):
        if not slides:
            raise ValueError("HeroSlider needs at least one slide")
        self.slides = tuple(slides)
        self.current = current % len(self.slides)
        self.playing = playing

    @property
    def interval(self):
        return storefront_setting("HERO_AUTOPLAY_SECONDS")

    def next(self):
        self.current = (self.current + 1) % len(self.slides)
        return self.current

    def prev(self):
        self.current = (self.current - 1 + len(self.slides)) % len(self.slides)
        return self.current

    def go_to(self, index):
        if not 0 <= index < len(self.slides):
            raise IndexError(f"slide {index} out of range")
        self.current = index
        return self.current

    def toggle_play(self):
        self.playing = not self.playing
        return self.playing

    def tick(self):
        # autoplay step; a paused slider stays put
        if self.playing:
            self.next()
        return self.current

    def as_dict(self):
        return {
            "current": self.current,
            "playing": self.playing,
            "interval_seconds": self.interval,
            "slides": [
                {"src": s.src or "/placeholder.svg", "title": s.title, "description": s.description}
                for s in self.slides
            ],
        }
