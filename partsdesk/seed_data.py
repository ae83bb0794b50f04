# partsdesk/seed_data.py
"""
Bundled baseline data: the sample parts catalog used when no catalog has
been saved yet, and the authorised user list.
"""

from typing import List

from .models.users import Role, User

AUTH_USERS: List[User] = [
    User(id="admin", user_name="Store Admin", role=Role.ADMIN),
    User(id="user01", user_name="Counter Staff 1", role=Role.USER),
    User(id="user02", user_name="Counter Staff 2", role=Role.USER),
    User(id="user03", user_name="Workshop Advisor", role=Role.USER),
]

# Columns: part no, name, location, on hand, due in, on order, AMD3, MAV, stock eff %, sys gen stock
SAMPLE_CATALOG_CSV = """PartNo,PartName,Location,OnHand,DueIn,OnOrder,AMD3,MAV,StkEff,SysGenStock
26300-35505,OIL FILTER,A-01-01,48,20,0,35.3,420,88,60
28113-2S000,AIR CLEANER ELEMENT,A-01-02,12,0,10,14.7,610,72,25
97133-2S000,CABIN AIR FILTER,A-01-03,2,5,0,9.3,380,40,12
58101-2SA70,FRONT BRAKE PAD KIT,B-02-01,6,0,4,11.0,2250,65,14
58302-2SA30,REAR BRAKE PAD KIT,B-02-02,1,0,0,6.7,1980,35,8
18849-08080,SPARK PLUG,B-02-03,64,0,0,22.0,310,95,40
25212-2B020,FAN BELT,C-03-01,3,0,0,2.3,890,50,4
98350-2S000,WIPER BLADE DRIVER,C-03-02,0,10,0,8.0,520,20,10
98360-2S000,WIPER BLADE PASSENGER,C-03-03,9,0,0,7.7,470,85,10
37110-2S000,BATTERY 60AH,D-04-01,4,2,0,3.0,6800,70,6
92101-2S000,HEADLAMP ASSY LH,,1,0,1,0.7,14500,30,2
86350-2S000,FRONT BUMPER COVER,E-05-01,0,0,0,0.3,9800,0,1
21513-23001,DRAIN PLUG GASKET,A-01-04,150,0,0,60.0,15,99,120
55311-2S000,REAR SHOCK ABSORBER,D-04-02,2,0,2,1.7,4300,55,4
"""
