from extensions import db

class Room(db.Model):
    __tablename__ = 'rooms'
    __table_args__ = (
        db.UniqueConstraint('number', name='uq_rooms_number'),
    )
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    number = db.Column(db.Integer, nullable=False)
    room_count = db.Column(db.Integer, nullable=False)
    is_occupied = db.Column(db.Boolean, default=False, nullable=False)
    floor = db.Column(db.Integer, nullable=False)
    sleeping_places = db.Column(db.Integer, nullable=False)
    room_type = db.Column(db.Enum('Standard', 'Deluxe', 'Suite', name='room_type'), nullable=False)
    need_cleaning = db.Column(db.Boolean, default=False, nullable=False)

    ROOM_TYPES = ('Standard', 'Deluxe', 'Suite')
    PATCHABLE_COLUMNS = ('room_count', 'is_occupied', 'floor', 'sleeping_places', 'room_type', 'need_cleaning')
    FILTERABLE_COLUMNS = ('id', 'number', 'room_count', 'is_occupied', 'floor',
                          'sleeping_places', 'room_type', 'need_cleaning')

    def to_dict(self):
        return {
            'id': self.id,
            'number': self.number,
            'room_count': self.room_count,
            'is_occupied': self.is_occupied,
            'floor': self.floor,
            'sleeping_places': self.sleeping_places,
            'room_type': self.room_type,
            'need_cleaning': self.need_cleaning
        }
