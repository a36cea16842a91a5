from sportnest.models.event import Event, EventStatus, Registration, RequestedItem
from sportnest.models.member import Admin, Member
