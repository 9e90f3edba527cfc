import pygame

from tetris_config import MUSIC_TRACKS, Settings


class Overlay:
    """Settings editor drawn over the board (F1). Edits a Settings object in place."""
    def __init__(self, settings: Settings):
        self.settings=settings
        self.active=False
        self.items=[
            ("CELL_SIZE","Cell size",16,48,2),
            ("DAS_MS","DAS",0,400,10),
            ("ARR_MS","ARR",0,200,5),
            ("EXTRA_SHAPES","Extra shapes",False,True,None),
            ("DOT_PROBABILITY","Dot chance",0.0,1.0,0.01),
            ("MUSIC_ENABLED","Music",False,True,None),
            ("MUSIC_TRACK","Music track",0,len(MUSIC_TRACKS)-1,1),
            ("SFX_ENABLED","Sound FX",False,True,None),
        ]
        self.index=0
        self.changed=False

    def toggle(self):
        self.active=not self.active
        if self.active: self.changed=False

    def handle(self,e):
        if e.key in (pygame.K_ESCAPE,pygame.K_F1): self.toggle(); return
        if e.key==pygame.K_UP: self.index=(self.index-1)%len(self.items); return
        if e.key==pygame.K_DOWN: self.index=(self.index+1)%len(self.items); return
        key,label,lo,hi,step=self.items[self.index]
        val=getattr(self.settings,key)
        if isinstance(lo,bool):
            if e.key in (pygame.K_RETURN,pygame.K_LEFT,pygame.K_RIGHT):
                setattr(self.settings,key,not val); self.changed=True
        else:
            if e.key==pygame.K_LEFT: val=max(lo,val-step)
            elif e.key==pygame.K_RIGHT: val=min(hi,val+step)
            else: return
            setattr(self.settings,key,round(val,2) if isinstance(step,float) else val)
            self.changed=True

    def draw(self,screen,font,w,h):
        if not self.active: return
        s=pygame.Surface((w-40,h-40),pygame.SRCALPHA); s.fill((20,25,40,230))
        screen.blit(s,(20,20))
        screen.blit(font.render("SETTINGS (F1/Esc to close)",True,(230,240,255)),(36,32))
        y=70
        for i,(key,label,lo,hi,step) in enumerate(self.items):
            col=(255,255,255) if i==self.index else (200,210,235)
            val=getattr(self.settings,key)
            if key=="MUSIC_TRACK": val=MUSIC_TRACKS[val]
            screen.blit(font.render(f"{label}: {val}",True,col),(36,y)); y+=26
